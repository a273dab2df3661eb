from pydantic import BaseModel, EmailStr, Field
from typing import Literal

RoleName = Literal["admin", "technician", "clerk"]


class UserBase(BaseModel):
    id: int
    name: str
    email: str
    role: str = "clerk"


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: RoleName = "clerk"
    password: str = Field(..., min_length=6)


class Token(BaseModel):
    access_token: str
    token_type: str
