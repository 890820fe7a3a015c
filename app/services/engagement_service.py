import logging

from sqlalchemy import delete, func, insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.exceptions import NotFound
from app.core.optimistic import OptimisticToggle
from app.db.backend import backend_call
from app.models import Like, Profile, SavedRecipe
from app.schemas import EngagementState
from app.services import recipe_lookup

logger = logging.getLogger(__name__)

EngagementModel = type[Like] | type[SavedRecipe]


async def _count(db: AsyncSession, model: EngagementModel, recipe_id: int) -> int:
    query = select(func.count()).select_from(model).where(model.recipe_id == recipe_id)
    return await db.scalar(query) or 0


async def _exists(db: AsyncSession, model: EngagementModel, user_id: str, recipe_id: int) -> bool:
    return await db.get(model, (user_id, recipe_id)) is not None


async def count_likes(db: AsyncSession, *, recipe_id: int) -> int:
    return await _count(db, Like, recipe_id)


async def has_liked(db: AsyncSession, *, user_id: str, recipe_id: int) -> bool:
    return await _exists(db, Like, user_id, recipe_id)


async def has_saved(db: AsyncSession, *, user_id: str, recipe_id: int) -> bool:
    return await _exists(db, SavedRecipe, user_id, recipe_id)


async def _toggle(
    db: AsyncSession,
    model: EngagementModel,
    *,
    user_id: str,
    recipe_id: int,
    currently_active: bool,
) -> EngagementState:
    await recipe_lookup.get_visible_recipe(db, recipe_id=recipe_id, viewer_id=user_id)
    if await db.get(Profile, user_id) is None:
        raise NotFound("Profile", user_id)

    table = model.__tablename__
    toggle = OptimisticToggle(
        active=currently_active, count=await _count(db, model, recipe_id)
    )

    async def commit(active: bool) -> None:
        if active:
            async with backend_call(db, f"Insert into {table}"):
                await db.execute(insert(model).values(user_id=user_id, recipe_id=recipe_id))
        else:
            # removing an absent pair is a no-op
            async with backend_call(db, f"Delete from {table}"):
                await db.execute(
                    delete(model).where(
                        model.user_id == user_id, model.recipe_id == recipe_id
                    )
                )

    active = await toggle.toggle(commit)
    logger.info(f"{table}: user {user_id} recipe {recipe_id} -> {active}")

    return EngagementState(
        recipe_id=recipe_id, active=active, count=await _count(db, model, recipe_id)
    )


async def toggle_like(
    db: AsyncSession, *, user_id: str, recipe_id: int, currently_liked: bool
) -> EngagementState:
    return await _toggle(
        db, Like, user_id=user_id, recipe_id=recipe_id, currently_active=currently_liked
    )


async def toggle_save(
    db: AsyncSession, *, user_id: str, recipe_id: int, currently_saved: bool
) -> EngagementState:
    return await _toggle(
        db, SavedRecipe, user_id=user_id, recipe_id=recipe_id, currently_active=currently_saved
    )
