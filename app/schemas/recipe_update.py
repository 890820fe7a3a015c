from pydantic import Field

from .recipe_base import Difficulty, RecipeBase


class RecipeUpdate(RecipeBase):
    prep_time: int | None = Field(None, ge=1, le=1440)
    cook_time: int | None = Field(None, ge=1, le=1440)
    servings: int | None = Field(None, ge=1, le=100)
    difficulty: Difficulty | None = None
