# models/student.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Student(Base):
     """
     Student model - enrolled learner at the institute.
     Managed by staff elsewhere; this service reads it to attach payments.
     """
     __tablename__ = "students"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True)

     # Personal info
     full_name = Column(String(200), nullable=False)
     phone = Column(String(20), nullable=True)
     guardian_phone = Column(String(20), nullable=True)

     # Billing
     monthly_fee = Column(Integer, nullable=True)  # None = no recurring fee tracked

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     user = relationship("User", back_populates="student")
     payments = relationship("Payment", back_populates="student", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Student(id={self.id}, name='{self.full_name}')>"
