from .base import Base

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint


class Ingredient(Base):
    __tablename__ = "ingredients"
    __table_args__ = (UniqueConstraint("recipe_id", "order", name="uq_ingredients_recipe_order"),)

    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), index=True, nullable=False
    )
    name = Column(String(255), nullable=False)
    quantity = Column(String(50))
    unit = Column(String(50))
    order = Column(Integer, nullable=False)
