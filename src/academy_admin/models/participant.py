"""Participant model - students enrolled in academic programs"""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.academy_admin.models.base import Base


class Participant(Base):
    __tablename__ = "participants"

    id: Mapped[int] = mapped_column(primary_key=True)
    reg_no: Mapped[Optional[str]] = mapped_column(String(20), unique=True, nullable=True, index=True)
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    division: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    deanery: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    parish: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    semester: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    program_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("programs.id"), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    program = relationship("Program", back_populates="participants")
    enrollments = relationship("Enrollment", back_populates="participant")
