from pydantic import BaseModel, ConfigDict, Field


class IngredientIn(BaseModel):
    # blank names are dropped before insert, not rejected here
    name: str = Field("", max_length=255)
    quantity: str | None = Field(None, max_length=50)
    unit: str | None = Field(None, max_length=50)


class Ingredient(BaseModel):
    name: str
    quantity: str | None = None
    unit: str | None = None
    order: int

    model_config = ConfigDict(from_attributes=True)
