from datetime import datetime

from pydantic import BaseModel, ConfigDict, computed_field

from .profile import Author


class CommentIn(BaseModel):
    # length is checked after trimming in the service
    content: str


class Comment(BaseModel):
    id: int
    recipe_id: int
    user_id: str
    content: str
    created_at: datetime
    updated_at: datetime
    author: Author | None = None

    @computed_field
    @property
    def edited(self) -> bool:
        return self.updated_at != self.created_at

    model_config = ConfigDict(from_attributes=True)
