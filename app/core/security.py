# app/core/security.py
from dataclasses import dataclass
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import time, jwt
from passlib.hash import bcrypt_sha256
from app.core.config import settings
from app.core.errors import AuthenticationError, PermissionDeniedError
from app.models.user import User, UserRole

ALGO = "HS256"
bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenClaims:
    id: int
    username: str
    role: str


def hash_password(raw: str) -> str:
    return bcrypt_sha256.hash(raw)

def verify_password(raw: str, hashed: str) -> bool:
    return bcrypt_sha256.verify(raw, hashed)

def make_access_token(user: User, ttl: Optional[int] = None) -> str:
    now = int(time.time())
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role.value,
        "iat": now,
        "exp": now + (ttl if ttl is not None else settings.access_token_ttl),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGO)

def verify_token(token: str) -> TokenClaims:
    """The one place bearer credentials are checked; every protected route goes through it."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGO])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid or expired token")
    try:
        return TokenClaims(id=int(payload["sub"]), username=payload["username"], role=payload["role"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")

def get_current_claims(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> TokenClaims:
    if not creds:
        raise AuthenticationError("No token provided")
    return verify_token(creds.credentials)

def require_role(*roles):
    role_values = [r.value if isinstance(r, UserRole) else r for r in roles]
    def _dep(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in role_values:
            raise PermissionDeniedError()
        return claims
    return _dep

require_admin = require_role(UserRole.admin)
