# dependencies.py
"""
Shared FastAPI dependencies: bearer-token verification and role guards.
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from passlib.context import CryptContext

load_dotenv()

SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = "HS256"
TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24 * 7)))  # 7 days

ROLE_ADMIN = "ADMIN"
ROLE_STUDENT = "STUDENT"

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def create_access_token(user_id: int, role: str, student_id: Optional[int] = None) -> str:
     payload = {
          "id": user_id,
          "role": role,
          "student_id": student_id,
          "exp": datetime.now(timezone.utc) + timedelta(minutes=TOKEN_EXPIRE_MINUTES),
     }
     return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
          return payload
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def require_admin(token: dict = Depends(verify_token)) -> dict:
     if token.get("role") != ROLE_ADMIN:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
     return token


def can_access_student(token: dict, student_id: int) -> bool:
     """Admins see every student; a student sees only themselves."""
     if token.get("role") == ROLE_ADMIN:
          return True
     return token.get("role") == ROLE_STUDENT and token.get("student_id") == student_id
