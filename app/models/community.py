"""ORM model for communities (boards that group posts)."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.models.base import Base


class Community(Base):
    __tablename__ = "communities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=False, default="")
    thumbnail = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
