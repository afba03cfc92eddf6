import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..core.db import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = Column(String(150), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    patients = relationship("Patient", back_populates="profile")

    def __repr__(self):
        return f"<Profile(id={self.id}, full_name='{self.full_name}')>"


class Patient(Base):
    __tablename__ = "patients"

    # --- Primary identifiers ---
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # --- Link to the display profile (name lives there) ---
    profile_id = Column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    profile = relationship("Profile", back_populates="patients", lazy="joined")

    # --- Payments relationship ---
    payments = relationship("Payment", back_populates="patient")

    # --- Timestamps ---
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Patient(id={self.id}, profile_id={self.profile_id})>"
