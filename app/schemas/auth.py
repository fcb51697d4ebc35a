# File: app/schemas/auth.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

class RegisterIn(BaseModel):
    username: str = Field(min_length=3, max_length=60)
    email: EmailStr
    password: str = Field(min_length=8, max_length=512)
    registration_secret: str = Field(min_length=1)

class LoginIn(BaseModel):
    username: str = Field(min_length=1, max_length=60)
    password: str = Field(min_length=1, max_length=512)

class UserOut(BaseModel):
    id: int
    username: str
    email: Optional[str] = None
    role: str

class TokenOut(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserOut

class ClaimsOut(BaseModel):
    id: int
    username: str
    role: str
