import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.exceptions import NotFound, Unauthorized, ValidationError
from app.db.backend import backend_call
from app.models import Comment, Profile
from app.models.base import utcnow
from app.schemas import Comment as CommentOut
from app.services import recipe_lookup

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 1000


def _clean_content(content: str) -> str:
    cleaned = content.strip()
    if not cleaned:
        raise ValidationError("Comment cannot be empty")
    if len(cleaned) > MAX_COMMENT_LENGTH:
        raise ValidationError(f"Comment must be at most {MAX_COMMENT_LENGTH} characters")
    return cleaned


async def _get_authored_comment(
    db: AsyncSession, *, comment_id: int, requester_id: str
) -> Comment:
    db_comment = await db.get(Comment, comment_id)
    if db_comment is None:
        raise NotFound("Comment", comment_id)
    if db_comment.user_id != requester_id:
        logger.warning(f"User {requester_id} tried to modify comment {comment_id}")
        raise Unauthorized("You can only modify your own comments")
    return db_comment


async def list_comments(db: AsyncSession, *, recipe_id: int) -> list[CommentOut]:
    query = (
        select(Comment)
        .where(Comment.recipe_id == recipe_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    return [CommentOut.model_validate(c) for c in result.scalars().all()]


async def add_comment(
    db: AsyncSession, *, user_id: str, recipe_id: int, content: str
) -> list[CommentOut]:
    cleaned = _clean_content(content)
    await recipe_lookup.get_visible_recipe(db, recipe_id=recipe_id, viewer_id=user_id)
    if await db.get(Profile, user_id) is None:
        raise NotFound("Profile", user_id)

    now = utcnow()
    async with backend_call(db, "Insert comment"):
        db.add(
            Comment(
                recipe_id=recipe_id,
                user_id=user_id,
                content=cleaned,
                created_at=now,
                updated_at=now,
            )
        )
    return await list_comments(db, recipe_id=recipe_id)


async def edit_comment(
    db: AsyncSession, *, comment_id: int, requester_id: str, content: str
) -> list[CommentOut]:
    db_comment = await _get_authored_comment(
        db, comment_id=comment_id, requester_id=requester_id
    )
    cleaned = _clean_content(content)

    async with backend_call(db, "Update comment"):
        db_comment.content = cleaned
        db_comment.updated_at = utcnow()
    return await list_comments(db, recipe_id=db_comment.recipe_id)


async def delete_comment(
    db: AsyncSession, *, comment_id: int, requester_id: str
) -> list[CommentOut]:
    db_comment = await _get_authored_comment(
        db, comment_id=comment_id, requester_id=requester_id
    )
    recipe_id = db_comment.recipe_id

    async with backend_call(db, "Delete comment"):
        await db.delete(db_comment)
    return await list_comments(db, recipe_id=recipe_id)
