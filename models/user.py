import uuid
from typing import Optional
from sqlalchemy import Column, Text, TIMESTAMP, Boolean, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from auth.otp import Challenge
from .base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, nullable=False)  # always stored lowercase
    password_hash = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False)

    # Hashed OTPs only; the two flows are independent of each other
    verification_otp_hash = Column(Text, nullable=True)
    verification_otp_expires_at = Column(TIMESTAMP, nullable=True)
    reset_otp_hash = Column(Text, nullable=True)
    reset_otp_expires_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())

    tasks = relationship("Task", back_populates="user", cascade="all, delete-orphan")

    @property
    def verification_challenge(self) -> Optional[Challenge]:
        if not self.verification_otp_hash or not self.verification_otp_expires_at:
            return None
        return Challenge(self.verification_otp_hash, self.verification_otp_expires_at)

    @verification_challenge.setter
    def verification_challenge(self, challenge: Optional[Challenge]) -> None:
        self.verification_otp_hash = challenge.hashed_code if challenge else None
        self.verification_otp_expires_at = challenge.expires_at if challenge else None

    @property
    def reset_challenge(self) -> Optional[Challenge]:
        if not self.reset_otp_hash or not self.reset_otp_expires_at:
            return None
        return Challenge(self.reset_otp_hash, self.reset_otp_expires_at)

    @reset_challenge.setter
    def reset_challenge(self, challenge: Optional[Challenge]) -> None:
        self.reset_otp_hash = challenge.hashed_code if challenge else None
        self.reset_otp_expires_at = challenge.expires_at if challenge else None

    def public_dict(self) -> dict:
        """Fields safe to hand back to the account owner (no hashes)."""
        return {
            "id": str(self.id),
            "email": self.email,
            "name": self.name,
        }
