import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.exceptions import Conflict, NotFound
from app.db.backend import backend_call
from app.models import Profile
from app.schemas import ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


async def _ensure_username_free(
    db: AsyncSession, *, username: str, user_id: str
) -> None:
    result = await db.execute(select(Profile.id).where(Profile.username == username))
    owner = result.scalar_one_or_none()
    if owner is not None and owner != user_id:
        raise Conflict(f"Username '{username}' is already taken")


async def get_profile(db: AsyncSession, *, user_id: str) -> Profile:
    db_profile = await db.get(Profile, user_id)
    if db_profile is None:
        raise NotFound("Profile", user_id)
    return db_profile


async def get_profile_by_username(db: AsyncSession, *, username: str) -> Profile:
    result = await db.execute(select(Profile).where(Profile.username == username))
    db_profile = result.scalar_one_or_none()
    if db_profile is None:
        raise NotFound("Profile", username)
    return db_profile


async def create_profile(
    db: AsyncSession, *, user_id: str, profile_in: ProfileCreate
) -> Profile:
    """Called once after the identity provider registers a new account."""
    if await db.get(Profile, user_id) is not None:
        raise Conflict("Profile already exists")
    await _ensure_username_free(db, username=profile_in.username, user_id=user_id)

    db_profile = Profile(
        id=user_id,
        username=profile_in.username,
        full_name=_clean_text(profile_in.full_name),
    )
    async with backend_call(db, "Insert profile"):
        db.add(db_profile)

    logger.info(f"Profile {profile_in.username} created for {user_id}")
    return db_profile


async def update_profile(
    db: AsyncSession, *, user_id: str, profile_in: ProfileUpdate
) -> Profile:
    db_profile = await get_profile(db, user_id=user_id)
    await _ensure_username_free(db, username=profile_in.username, user_id=user_id)

    async with backend_call(db, "Update profile"):
        db_profile.username = profile_in.username
        db_profile.full_name = _clean_text(profile_in.full_name)
        db_profile.bio = _clean_text(profile_in.bio)

    await db.refresh(db_profile)
    return db_profile


async def set_avatar_url(db: AsyncSession, *, user_id: str, avatar_url: str) -> Profile:
    db_profile = await get_profile(db, user_id=user_id)
    async with backend_call(db, "Update avatar"):
        db_profile.avatar_url = avatar_url
    await db.refresh(db_profile)
    return db_profile
