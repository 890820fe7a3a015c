from .base import Base, utcnow

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship


class Profile(Base):
    __tablename__ = "profiles"

    # identity provider's user id
    id = Column(String(64), primary_key=True)
    username = Column(String(20), unique=True, index=True, nullable=False)
    full_name = Column(String(100))
    bio = Column(Text)
    avatar_url = Column(String(1024))
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    recipes = relationship("Recipe", back_populates="author", passive_deletes=True)
