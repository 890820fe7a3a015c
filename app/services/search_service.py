import logging
from urllib.parse import urlencode

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.config import settings
from app.models import Recipe
from app.schemas import RecipeSummary, SearchFilters, SearchResult
from app.services.recipe_service import SUMMARY_OPTIONS, to_summary

logger = logging.getLogger(__name__)


def _order_by(sort: str):
    if sort == "oldest":
        return (Recipe.created_at.asc(), Recipe.id.asc())
    if sort == "quickest":
        return (Recipe.cook_time.asc().nulls_last(), Recipe.created_at.desc())
    return (Recipe.created_at.desc(), Recipe.id.desc())


def build_search_query(filters: SearchFilters, *, limit: int):
    query = select(Recipe).options(*SUMMARY_OPTIONS).where(Recipe.status == "published")

    term = filters.q.strip()
    if term:
        # user input is matched literally, % and _ included
        query = query.where(
            or_(
                Recipe.title.icontains(term, autoescape=True),
                Recipe.description.icontains(term, autoescape=True),
            )
        )

    if filters.difficulty != "all":
        query = query.where(Recipe.difficulty == filters.difficulty)

    return query.order_by(*_order_by(filters.sort)).limit(limit)


def filter_by_categories(
    recipes: list[RecipeSummary], category_ids: list[int]
) -> list[RecipeSummary]:
    """Keeps recipes tagged with any of the selected categories."""
    if not category_ids:
        return recipes
    wanted = set(category_ids)
    return [r for r in recipes if wanted.intersection(c.id for c in r.categories)]


async def search_recipes(
    db: AsyncSession, *, filters: SearchFilters, limit: int | None = None
) -> SearchResult:
    """
    Text, difficulty and ordering run in the database, capped at the result
    limit. The category filter runs afterwards on that capped page, so
    ``total`` can be lower than the real number of matching recipes.
    """
    limit = limit or settings.SEARCH_RESULT_LIMIT
    result = await db.execute(build_search_query(filters, limit=limit))
    candidates = [to_summary(r) for r in result.scalars().all()]

    items = filter_by_categories(candidates, filters.category_ids)
    logger.info(
        f"Search {filters.to_query_params()} -> {len(candidates)} candidates, {len(items)} kept"
    )
    return SearchResult(
        items=items,
        total=len(items),
        query_string=urlencode(filters.to_query_params()),
    )
