from pydantic import BaseModel


class LikeToggle(BaseModel):
    currently_liked: bool


class SaveToggle(BaseModel):
    currently_saved: bool


class EngagementState(BaseModel):
    recipe_id: int
    active: bool
    count: int
