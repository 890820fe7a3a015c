from pydantic import Field

from .recipe_base import Difficulty, RecipeBase


class RecipeCreate(RecipeBase):
    prep_time: int = Field(..., ge=1, le=1440)
    cook_time: int = Field(..., ge=1, le=1440)
    servings: int = Field(..., ge=1, le=100)
    difficulty: Difficulty = Field(...)
