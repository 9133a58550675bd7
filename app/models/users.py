# app/models/users.py

from pydantic import BaseModel, EmailStr


class UserSeed(BaseModel):
    id: str
    name: str
    email: EmailStr
    password: str  # plaintext; hashed before it is stored


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserOut(BaseModel):
    id: str
    name: str
    email: EmailStr

    class Config:
        from_attributes = True
