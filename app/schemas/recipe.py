from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .category import Category
from .ingredient import Ingredient
from .instruction import Instruction
from .profile import Author
from .recipe_image import RecipeImage


class Recipe(BaseModel):
    id: int
    user_id: str
    title: str
    description: str | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    difficulty: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime
    author: Author | None = None
    ingredients: list[Ingredient] = Field(default_factory=list)
    instructions: list[Instruction] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    images: list[RecipeImage] = Field(default_factory=list)
    like_count: int = 0
    liked: bool = False
    saved: bool = False

    # for reading data from SQLAlchemy objects
    model_config = ConfigDict(from_attributes=True)


class RecipeSummary(BaseModel):
    id: int
    title: str
    description: str | None = None
    cook_time: int | None = None
    servings: int | None = None
    difficulty: str | None = None
    status: str
    created_at: datetime
    author: Author | None = None
    primary_image: str | None = None
    categories: list[Category] = Field(default_factory=list)
