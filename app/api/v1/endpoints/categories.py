from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas import Category
from app.services import category_service

router = APIRouter()


@router.get("/", response_model=List[Category])
async def read_categories(*, db: AsyncSession = Depends(get_db)) -> Any:
    return await category_service.list_categories(db=db)
