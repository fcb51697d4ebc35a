# File: app/routers/auth.py

import hmac
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.core.config import settings
from app.core.errors import PermissionDeniedError
from app.core.security import make_access_token, get_current_claims, TokenClaims
from app.models.user import User, UserRole
from app.schemas.auth import RegisterIn, LoginIn, TokenOut, UserOut, ClaimsOut
from app.schemas.common import ApiResponse
from app.services import users as user_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_out(user: User) -> UserOut:
    return UserOut(id=user.id, username=user.username, email=user.email, role=user.role.value)


@router.post("/register", response_model=ApiResponse[UserOut])
async def register(body: RegisterIn, db: AsyncSession = Depends(get_db)):
    secret = settings.admin_registration_secret
    if not secret or not hmac.compare_digest(body.registration_secret, secret):
        raise PermissionDeniedError(
            "Invalid registration secret. Only authorized personnel can register as admin."
        )
    user = await user_service.create_user(
        db, body.username, body.password, email=str(body.email), role=UserRole.admin
    )
    return ApiResponse(message="Admin account created successfully. You can now log in.", data=_user_out(user))


@router.post("/login", response_model=ApiResponse[TokenOut])
async def login(body: LoginIn, db: AsyncSession = Depends(get_db)):
    user = await user_service.authenticate_admin(db, body.username, body.password)
    token = TokenOut(token=make_access_token(user), expires_in=settings.access_token_ttl, user=_user_out(user))
    return ApiResponse(message="Login successful", data=token)


@router.get("/me", response_model=ApiResponse[ClaimsOut])
async def me(claims: TokenClaims = Depends(get_current_claims)):
    return ApiResponse(data=ClaimsOut(id=claims.id, username=claims.username, role=claims.role))
