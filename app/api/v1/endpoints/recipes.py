from typing import Any, List

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.identity import SessionContext, optional_session, require_session
from app.db.session import get_db
from app.schemas import (
    Comment,
    CommentIn,
    EngagementState,
    LikeToggle,
    Recipe,
    RecipeCreate,
    RecipeImage,
    RecipeSummary,
    RecipeUpdate,
    SaveToggle,
    SearchFilters,
    SearchResult,
)
from app.schemas.search import DifficultyFilter, SortOrder
from app.services import (
    comment_service,
    engagement_service,
    image_service,
    recipe_lookup,
    recipe_service,
    search_service,
)

router = APIRouter()


@router.post("/", response_model=Recipe, status_code=201)
async def create_new_recipe(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    recipe_in: RecipeCreate,
) -> Any:
    return await recipe_service.create_recipe(db=db, owner_id=session.user_id, recipe_in=recipe_in)


@router.get("/", response_model=List[RecipeSummary])
async def read_recipes(
    *,
    db: AsyncSession = Depends(get_db),
    offset: int = Query(0, ge=0),
    limit: int = Query(settings.RECIPES_PAGE_SIZE, ge=1, le=100),
) -> Any:
    return await recipe_service.list_recipes(db=db, offset=offset, limit=limit)


@router.get("/search", response_model=SearchResult)
async def search_recipes(
    *,
    db: AsyncSession = Depends(get_db),
    q: str = Query("", description="Matched against title and description"),
    difficulty: DifficultyFilter = "all",
    sort: SortOrder = "newest",
    categories: str | None = Query(None, description="Comma-separated category ids"),
) -> Any:
    filters = SearchFilters.from_query_params(
        {"q": q, "difficulty": difficulty, "sort": sort, "categories": categories or ""}
    )
    return await search_service.search_recipes(db=db, filters=filters)


@router.get("/{recipe_id}", response_model=Recipe)
async def read_recipe_by_id(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext | None = Depends(optional_session),
    recipe_id: int,
) -> Any:
    viewer_id = session.user_id if session else None
    return await recipe_service.get_recipe(db=db, recipe_id=recipe_id, viewer_id=viewer_id)


@router.put("/{recipe_id}", response_model=Recipe)
async def replace_existing_recipe(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    recipe_id: int,
    recipe_in: RecipeUpdate,
) -> Any:
    return await recipe_service.update_recipe(
        db=db, recipe_id=recipe_id, requester_id=session.user_id, recipe_in=recipe_in
    )


@router.delete("/{recipe_id}", status_code=204)
async def delete_existing_recipe(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    recipe_id: int,
) -> None:
    await recipe_service.delete_recipe(db=db, recipe_id=recipe_id, requester_id=session.user_id)


@router.post("/{recipe_id}/like", response_model=EngagementState)
async def toggle_recipe_like(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    recipe_id: int,
    toggle_in: LikeToggle,
) -> Any:
    return await engagement_service.toggle_like(
        db=db,
        user_id=session.user_id,
        recipe_id=recipe_id,
        currently_liked=toggle_in.currently_liked,
    )


@router.post("/{recipe_id}/save", response_model=EngagementState)
async def toggle_recipe_save(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    recipe_id: int,
    toggle_in: SaveToggle,
) -> Any:
    return await engagement_service.toggle_save(
        db=db,
        user_id=session.user_id,
        recipe_id=recipe_id,
        currently_saved=toggle_in.currently_saved,
    )


@router.get("/{recipe_id}/comments", response_model=List[Comment])
async def read_recipe_comments(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext | None = Depends(optional_session),
    recipe_id: int,
) -> Any:
    viewer_id = session.user_id if session else None
    await recipe_lookup.get_visible_recipe(db=db, recipe_id=recipe_id, viewer_id=viewer_id)
    return await comment_service.list_comments(db=db, recipe_id=recipe_id)


@router.post("/{recipe_id}/comments", response_model=List[Comment], status_code=201)
async def add_recipe_comment(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    recipe_id: int,
    comment_in: CommentIn,
) -> Any:
    return await comment_service.add_comment(
        db=db, user_id=session.user_id, recipe_id=recipe_id, content=comment_in.content
    )


@router.post("/{recipe_id}/images", response_model=RecipeImage, status_code=201)
async def upload_recipe_image(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    recipe_id: int,
    file: UploadFile = File(...),
    is_primary: bool = Form(False),
) -> Any:
    return await image_service.add_recipe_image(
        db=db,
        recipe_id=recipe_id,
        requester_id=session.user_id,
        file=file,
        is_primary=is_primary,
    )
