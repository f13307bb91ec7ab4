"""Database ORM models (read-only)."""

from datetime import datetime

from sqlalchemy import DateTime, Float, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class TherapistORM(Base):
    """Therapist ORM model (read-only)."""

    __tablename__ = "therapists"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    profile_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    experience_years: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    modes: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    education: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    experience: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    expertise: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    about: Mapped[str | None] = mapped_column(Text, nullable=True)
    fees: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    fees_raw: Mapped[str | None] = mapped_column(Text, nullable=True)
    fees_currency: Mapped[str | None] = mapped_column(String(10), nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
