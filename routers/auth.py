# routers/auth.py
"""
Login for staff and students (phone + PIN).
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import create_access_token, pwd_context
from models import User
from schemas.auth import LoginRequest, LoginResponse, LoginUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=LoginResponse, summary="Log in with phone and PIN")
def login_user(body: LoginRequest, db: Session = Depends(get_session)):
     if not body.phone or not body.pin:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Phone and PIN are required")

     user = db.query(User).filter(User.phone == body.phone).first()

     # Same message for unknown phone and wrong PIN
     if not user or not pwd_context.verify(body.pin, user.pin_hash):
          logger.info("Failed login for phone %s", body.phone)
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

     student_id = user.student.id if user.student else None
     token = create_access_token(user.id, user.role.value, student_id)
     return LoginResponse(
          token=token,
          user=LoginUser(
               id=user.id,
               username=user.username,
               phone=user.phone,
               role=user.role.value,
               student_id=student_id,
          ),
     )
