from .base import Base
from .recipe_category_association import recipe_category_association

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), unique=True, nullable=False)
    slug = Column(String(50), unique=True, index=True, nullable=False)

    recipes = relationship(
        "Recipe",
        secondary=recipe_category_association,
        back_populates="categories",
        passive_deletes=True,
    )
