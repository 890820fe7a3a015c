import logging
import uuid
from io import BytesIO

from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.config import settings
from app.core.exceptions import RecipeAppError
from app.core.s3_client import s3_client
from app.db.backend import backend_call
from app.models import Profile, RecipeImage
from app.services import profile_service, recipe_lookup

logger = logging.getLogger(__name__)

EXTENSIONS = {"image/jpeg": "jpg", "image/png": "png", "image/webp": "webp"}


async def validate_and_process_image(file: UploadFile) -> tuple[BytesIO, str]:
    await file.seek(0)
    content: bytes = await file.read()
    file_size: int = len(content)

    if file_size > settings.MAX_FILE_SIZE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Max size is {settings.MAX_FILE_SIZE_MB}MB",
        )

    try:
        image = Image.open(BytesIO(content))
    except UnidentifiedImageError:
        raise HTTPException(status_code=400, detail="Invalid image file") from None

    # trust the decoded format, not the client's content type
    real_content_type = Image.MIME.get(image.format or "", "")
    if real_content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Invalid file type: {real_content_type or 'unknown'}. "
                f"Required: {', '.join(settings.ALLOWED_IMAGE_TYPES)}"
            ),
        )

    if image.width > settings.MAX_IMAGE_WIDTH or image.height > settings.MAX_IMAGE_HEIGHT:
        raise HTTPException(
            status_code=400,
            detail=(
                "Image resolution too high. "
                f"Max {settings.MAX_IMAGE_WIDTH}X{settings.MAX_IMAGE_HEIGHT}"
            ),
        )

    return BytesIO(content), real_content_type


def _object_name(prefix: str, content_type: str) -> str:
    return f"{prefix}{uuid.uuid4().hex}.{EXTENSIONS.get(content_type, 'bin')}"


async def _discard_upload(object_name: str) -> None:
    # no row points at the object
    logger.warning(f"Removing orphaned upload {object_name}")
    await s3_client.delete_file(object_name)


async def upload_avatar(db: AsyncSession, *, user_id: str, file: UploadFile) -> Profile:
    await profile_service.get_profile(db, user_id=user_id)
    data, content_type = await validate_and_process_image(file)

    object_name = _object_name(f"avatars/{user_id}-", content_type)
    url = await s3_client.upload_file(data, object_name, content_type)
    logger.info(f"Avatar uploaded for {user_id}: {object_name}")

    try:
        return await profile_service.set_avatar_url(db, user_id=user_id, avatar_url=url)
    except RecipeAppError:
        await _discard_upload(object_name)
        raise


async def add_recipe_image(
    db: AsyncSession,
    *,
    recipe_id: int,
    requester_id: str,
    file: UploadFile,
    is_primary: bool = False,
) -> RecipeImage:
    """Stores an image for an owned recipe. The first image is always primary."""
    await recipe_lookup.get_owned_recipe(db, recipe_id=recipe_id, requester_id=requester_id)
    data, content_type = await validate_and_process_image(file)

    has_primary = await db.scalar(
        select(RecipeImage.id)
        .where(RecipeImage.recipe_id == recipe_id, RecipeImage.is_primary.is_(True))
        .limit(1)
    )
    make_primary = is_primary or has_primary is None

    object_name = _object_name(f"recipes/{recipe_id}/", content_type)
    url = await s3_client.upload_file(data, object_name, content_type)

    db_image = RecipeImage(recipe_id=recipe_id, image_url=url, is_primary=make_primary)
    try:
        async with backend_call(db, "Insert recipe image"):
            if make_primary:
                await db.execute(
                    update(RecipeImage)
                    .where(RecipeImage.recipe_id == recipe_id)
                    .values(is_primary=False)
                )
            db.add(db_image)
    except RecipeAppError:
        await _discard_upload(object_name)
        raise

    logger.info(f"Image {object_name} added to recipe {recipe_id}")
    return db_image
