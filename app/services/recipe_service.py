import logging
from typing import Iterable, Sequence

from sqlalchemy import delete, insert, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFound, ValidationError
from app.db.backend import backend_call
from app.models import (
    Category,
    Ingredient,
    Instruction,
    Profile,
    Recipe,
    SavedRecipe,
    recipe_category_association,
)
from app.schemas import (
    IngredientIn,
    InstructionIn,
    RecipeCreate,
    RecipeSummary,
    RecipeUpdate,
)
from app.schemas import Recipe as RecipeOut
from app.services import engagement_service
from app.services.recipe_lookup import get_owned_recipe, is_visible_to

logger = logging.getLogger(__name__)

SUMMARY_OPTIONS = (selectinload(Recipe.categories), selectinload(Recipe.images))
DETAIL_OPTIONS = (
    selectinload(Recipe.ingredients),
    selectinload(Recipe.instructions),
    *SUMMARY_OPTIONS,
)
AGGREGATE_FIELDS = {"ingredients", "instructions", "category_ids"}


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _number_ingredients(recipe_id: int, ingredients: Iterable[IngredientIn]) -> list[Ingredient]:
    # array position decides the order, blank rows do not take a number
    valid = [i for i in ingredients if i.name.strip()]
    return [
        Ingredient(
            recipe_id=recipe_id,
            name=ingredient.name.strip(),
            quantity=_clean_text(ingredient.quantity),
            unit=_clean_text(ingredient.unit),
            order=index,
        )
        for index, ingredient in enumerate(valid, start=1)
    ]


def _number_instructions(
    recipe_id: int, instructions: Iterable[InstructionIn]
) -> list[Instruction]:
    valid = [i for i in instructions if i.description.strip()]
    return [
        Instruction(
            recipe_id=recipe_id,
            step_number=index,
            description=instruction.description.strip(),
        )
        for index, instruction in enumerate(valid, start=1)
    ]


def _validate_aggregate(recipe_in: RecipeCreate | RecipeUpdate) -> None:
    if not recipe_in.title.strip():
        raise ValidationError("Title is required")
    if not any(i.name.strip() for i in recipe_in.ingredients):
        raise ValidationError("At least one ingredient is required")
    if not any(i.description.strip() for i in recipe_in.instructions):
        raise ValidationError("At least one instruction is required")


async def _checked_category_ids(db: AsyncSession, category_ids: Sequence[int]) -> list[int]:
    unique_ids = list(dict.fromkeys(category_ids))
    if not unique_ids:
        return []

    result = await db.execute(select(Category.id).where(Category.id.in_(unique_ids)))
    known = set(result.scalars().all())
    unknown = [c for c in unique_ids if c not in known]
    if unknown:
        raise ValidationError(f"Unknown categories: {', '.join(str(c) for c in unknown)}")
    return unique_ids


def _recipe_fields(recipe_in: RecipeCreate | RecipeUpdate) -> dict:
    fields = recipe_in.model_dump(exclude=AGGREGATE_FIELDS)
    fields["title"] = fields["title"].strip()
    fields["description"] = _clean_text(fields["description"])
    return fields


async def _link_categories(db: AsyncSession, recipe_id: int, category_ids: list[int]) -> None:
    if not category_ids:
        return
    async with backend_call(db, "Link recipe categories"):
        await db.execute(
            insert(recipe_category_association),
            [{"recipe_id": recipe_id, "category_id": c} for c in category_ids],
        )


async def create_recipe(
    db: AsyncSession, *, owner_id: str, recipe_in: RecipeCreate
) -> RecipeOut:
    """
    Inserts the recipe row, then its ingredients, instructions and category
    links, one committed step at a time. A failure after the first step
    leaves the recipe partially populated; nothing is rolled back.
    """
    _validate_aggregate(recipe_in)
    if await db.get(Profile, owner_id) is None:
        raise NotFound("Profile", owner_id)
    category_ids = await _checked_category_ids(db, recipe_in.category_ids)

    db_recipe = Recipe(**_recipe_fields(recipe_in), user_id=owner_id)
    async with backend_call(db, "Insert recipe"):
        db.add(db_recipe)

    recipe_id = db_recipe.id
    async with backend_call(db, "Insert ingredients"):
        db.add_all(_number_ingredients(recipe_id, recipe_in.ingredients))
    async with backend_call(db, "Insert instructions"):
        db.add_all(_number_instructions(recipe_id, recipe_in.instructions))
    await _link_categories(db, recipe_id, category_ids)

    logger.info(f"Recipe {recipe_id} created by {owner_id}")
    return await get_recipe(db, recipe_id=recipe_id, viewer_id=owner_id)


async def update_recipe(
    db: AsyncSession, *, recipe_id: int, requester_id: str, recipe_in: RecipeUpdate
) -> RecipeOut:
    """
    Full replacement: child rows and category links are deleted and
    re-inserted from the submitted arrays rather than diffed.
    """
    db_recipe = await get_owned_recipe(db, recipe_id=recipe_id, requester_id=requester_id)
    _validate_aggregate(recipe_in)
    category_ids = await _checked_category_ids(db, recipe_in.category_ids)
    db.expire(db_recipe, ["ingredients", "instructions", "categories"])

    async with backend_call(db, "Update recipe"):
        for field, value in _recipe_fields(recipe_in).items():
            setattr(db_recipe, field, value)

    async with backend_call(db, "Delete ingredients"):
        await db.execute(delete(Ingredient).where(Ingredient.recipe_id == recipe_id))
    async with backend_call(db, "Delete instructions"):
        await db.execute(delete(Instruction).where(Instruction.recipe_id == recipe_id))

    async with backend_call(db, "Insert ingredients"):
        db.add_all(_number_ingredients(recipe_id, recipe_in.ingredients))
    async with backend_call(db, "Insert instructions"):
        db.add_all(_number_instructions(recipe_id, recipe_in.instructions))

    async with backend_call(db, "Unlink recipe categories"):
        await db.execute(
            delete(recipe_category_association).where(
                recipe_category_association.c.recipe_id == recipe_id
            )
        )
    await _link_categories(db, recipe_id, category_ids)

    logger.info(f"Recipe {recipe_id} replaced by {requester_id}")
    return await get_recipe(db, recipe_id=recipe_id, viewer_id=requester_id)


async def delete_recipe(db: AsyncSession, *, recipe_id: int, requester_id: str) -> None:
    db_recipe = await get_owned_recipe(db, recipe_id=recipe_id, requester_id=requester_id)

    # dependents go with the row through ON DELETE CASCADE
    async with backend_call(db, "Delete recipe"):
        await db.delete(db_recipe)

    logger.info(f"Recipe {recipe_id} deleted by {requester_id}")


async def get_recipe(
    db: AsyncSession, *, recipe_id: int, viewer_id: str | None = None
) -> RecipeOut:
    query = (
        select(Recipe)
        .options(*DETAIL_OPTIONS)
        .where(Recipe.id == recipe_id)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    db_recipe = result.scalar_one_or_none()

    if db_recipe is None or not is_visible_to(db_recipe, viewer_id):
        raise NotFound("Recipe", recipe_id)

    recipe = RecipeOut.model_validate(db_recipe)
    recipe.like_count = await engagement_service.count_likes(db, recipe_id=recipe_id)
    if viewer_id:
        recipe.liked = await engagement_service.has_liked(
            db, user_id=viewer_id, recipe_id=recipe_id
        )
        recipe.saved = await engagement_service.has_saved(
            db, user_id=viewer_id, recipe_id=recipe_id
        )
    return recipe


def to_summary(db_recipe: Recipe) -> RecipeSummary:
    primary = next((img.image_url for img in db_recipe.images if img.is_primary), None)
    return RecipeSummary.model_validate(
        {
            "id": db_recipe.id,
            "title": db_recipe.title,
            "description": db_recipe.description,
            "cook_time": db_recipe.cook_time,
            "servings": db_recipe.servings,
            "difficulty": db_recipe.difficulty,
            "status": db_recipe.status,
            "created_at": db_recipe.created_at,
            "author": db_recipe.author,
            "primary_image": primary,
            "categories": db_recipe.categories,
        },
        from_attributes=True,
    )


async def list_recipes(
    db: AsyncSession, *, offset: int = 0, limit: int = 12
) -> list[RecipeSummary]:
    query = (
        select(Recipe)
        .options(*SUMMARY_OPTIONS)
        .where(Recipe.status == "published")
        .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(query)
    return [to_summary(r) for r in result.scalars().all()]


async def list_user_recipes(
    db: AsyncSession, *, username: str, viewer_id: str | None = None
) -> list[RecipeSummary]:
    result = await db.execute(select(Profile).where(Profile.username == username))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise NotFound("Profile", username)

    query = (
        select(Recipe)
        .options(*SUMMARY_OPTIONS)
        .where(Recipe.user_id == profile.id)
        .order_by(Recipe.created_at.desc(), Recipe.id.desc())
    )
    if viewer_id != profile.id:
        query = query.where(Recipe.status == "published")

    result = await db.execute(query)
    return [to_summary(r) for r in result.scalars().all()]


async def list_saved_recipes(db: AsyncSession, *, user_id: str) -> list[RecipeSummary]:
    query = (
        select(Recipe)
        .join(SavedRecipe, SavedRecipe.recipe_id == Recipe.id)
        .options(*SUMMARY_OPTIONS)
        .where(SavedRecipe.user_id == user_id)
        .where(or_(Recipe.status == "published", Recipe.user_id == user_id))
        .order_by(SavedRecipe.created_at.desc())
    )
    result = await db.execute(query)
    return [to_summary(r) for r in result.scalars().all()]
