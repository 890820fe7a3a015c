import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.exceptions import NotFound, Unauthorized
from app.models import Recipe

logger = logging.getLogger(__name__)


def is_visible_to(db_recipe: Recipe, viewer_id: str | None) -> bool:
    # drafts are only visible to their owner
    return db_recipe.status != "draft" or db_recipe.user_id == viewer_id


async def get_recipe_row(db: AsyncSession, *, recipe_id: int) -> Recipe:
    query = select(Recipe).where(Recipe.id == recipe_id)
    result = await db.execute(query)
    db_recipe = result.scalar_one_or_none()
    if db_recipe is None:
        raise NotFound("Recipe", recipe_id)
    return db_recipe


async def get_visible_recipe(
    db: AsyncSession, *, recipe_id: int, viewer_id: str | None
) -> Recipe:
    """
    Loads a recipe the viewer may interact with. Someone else's draft is
    reported as missing, the same as a recipe that does not exist.
    """
    db_recipe = await db.get(Recipe, recipe_id)
    if db_recipe is None or not is_visible_to(db_recipe, viewer_id):
        raise NotFound("Recipe", recipe_id)
    return db_recipe


async def get_owned_recipe(db: AsyncSession, *, recipe_id: int, requester_id: str) -> Recipe:
    db_recipe = await get_recipe_row(db, recipe_id=recipe_id)
    if db_recipe.user_id != requester_id:
        logger.warning(f"User {requester_id} tried to modify recipe {recipe_id}")
        raise Unauthorized("You can only modify your own recipes")
    return db_recipe
