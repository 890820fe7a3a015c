from typing import Annotated, Literal

from pydantic import BaseModel, Field, StringConstraints

from .ingredient import IngredientIn
from .instruction import InstructionIn

Difficulty = Literal["easy", "medium", "hard"]
RecipeStatus = Literal["draft", "published"]

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]


class RecipeBase(BaseModel):
    title: Title
    description: str | None = Field(None, max_length=5000)
    status: RecipeStatus = "published"
    ingredients: list[IngredientIn] = Field(default_factory=list, max_length=100)
    instructions: list[InstructionIn] = Field(default_factory=list, max_length=100)
    category_ids: list[int] = Field(default_factory=list)
