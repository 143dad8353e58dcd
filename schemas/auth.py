# schemas/auth.py
from typing import Optional
from pydantic import BaseModel


class LoginRequest(BaseModel):
     phone: Optional[str] = None
     pin: Optional[str] = None


class LoginUser(BaseModel):
     id: int
     username: str
     phone: str
     role: str
     student_id: Optional[int] = None


class LoginResponse(BaseModel):
     token: str
     user: LoginUser
