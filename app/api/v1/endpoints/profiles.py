from typing import Any, List

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.identity import SessionContext, optional_session, require_session
from app.db.session import get_db
from app.schemas import Profile, ProfileCreate, ProfileUpdate, RecipeSummary
from app.services import image_service, profile_service, recipe_service

router = APIRouter()


@router.post("/", response_model=Profile, status_code=201)
async def create_own_profile(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    profile_in: ProfileCreate,
) -> Any:
    return await profile_service.create_profile(
        db=db, user_id=session.user_id, profile_in=profile_in
    )


@router.get("/me", response_model=Profile)
async def read_own_profile(
    *, db: AsyncSession = Depends(get_db), session: SessionContext = Depends(require_session)
) -> Any:
    return await profile_service.get_profile(db=db, user_id=session.user_id)


@router.patch("/me", response_model=Profile)
async def update_own_profile(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    profile_in: ProfileUpdate,
) -> Any:
    return await profile_service.update_profile(
        db=db, user_id=session.user_id, profile_in=profile_in
    )


@router.post("/me/avatar", response_model=Profile)
async def upload_own_avatar(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    file: UploadFile = File(...),
) -> Any:
    return await image_service.upload_avatar(db=db, user_id=session.user_id, file=file)


@router.get("/me/saved", response_model=List[RecipeSummary])
async def read_saved_recipes(
    *, db: AsyncSession = Depends(get_db), session: SessionContext = Depends(require_session)
) -> Any:
    return await recipe_service.list_saved_recipes(db=db, user_id=session.user_id)


@router.get("/{username}", response_model=Profile)
async def read_profile(*, db: AsyncSession = Depends(get_db), username: str) -> Any:
    return await profile_service.get_profile_by_username(db=db, username=username)


@router.get("/{username}/recipes", response_model=List[RecipeSummary])
async def read_profile_recipes(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext | None = Depends(optional_session),
    username: str,
) -> Any:
    viewer_id = session.user_id if session else None
    return await recipe_service.list_user_recipes(db=db, username=username, viewer_id=viewer_id)
