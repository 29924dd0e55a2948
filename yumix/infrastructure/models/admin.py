"""SQLAlchemy model for the admin table."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from yumix.infrastructure.database import Base


class AdminModel(Base):
    """Database representation of a back-office administrator."""

    __tablename__ = "admin"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="active")
    preferences = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


__all__ = ["AdminModel"]
