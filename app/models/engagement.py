from .base import Base, utcnow

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String


class Like(Base):
    __tablename__ = "likes"

    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class SavedRecipe(Base):
    __tablename__ = "saved_recipes"

    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
