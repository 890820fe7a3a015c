from .base import Base, utcnow
from .recipe_category_association import recipe_category_association

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        String(64), ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    title = Column(String(100), index=True, nullable=False)
    description = Column(Text)
    prep_time = Column(Integer)
    cook_time = Column(Integer)
    servings = Column(Integer)
    difficulty = Column(String(10))
    status = Column(String(10), default="published", nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    author = relationship("Profile", back_populates="recipes", lazy="joined")
    ingredients = relationship(
        "Ingredient",
        order_by="Ingredient.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    instructions = relationship(
        "Instruction",
        order_by="Instruction.step_number",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    categories = relationship(
        "Category",
        secondary=recipe_category_association,
        back_populates="recipes",
        order_by="Category.name",
        passive_deletes=True,
    )
    images = relationship(
        "RecipeImage",
        order_by="RecipeImage.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
