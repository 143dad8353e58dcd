# models/user.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class UserRole(str, enum.Enum):
     """Who is logging in: institute staff or an enrolled student."""
     ADMIN = "ADMIN"
     STUDENT = "STUDENT"


class User(Base):
     """
     User model - central authentication table.
     Staff accounts issue payments; student accounts only read their own history.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     username = Column(String(100), nullable=False)
     phone = Column(String(20), unique=True, nullable=False, index=True)
     pin_hash = Column(String(255), nullable=False)
     role = Column(
          Enum(UserRole, name="user_role", create_constraint=True),
          default=UserRole.STUDENT,
          nullable=False,
     )
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     student = relationship("Student", back_populates="user", uselist=False)
     issued_payments = relationship("Payment", back_populates="created_by_user")

     def __repr__(self):
          return f"<User(id={self.id}, phone='{self.phone}', role='{self.role.value}')>"

     @property
     def is_admin(self) -> bool:
          return self.role == UserRole.ADMIN
