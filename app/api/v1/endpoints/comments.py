from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.identity import SessionContext, require_session
from app.db.session import get_db
from app.schemas import Comment, CommentIn
from app.services import comment_service

router = APIRouter()


@router.patch("/{comment_id}", response_model=List[Comment])
async def edit_existing_comment(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    comment_id: int,
    comment_in: CommentIn,
) -> Any:
    return await comment_service.edit_comment(
        db=db, comment_id=comment_id, requester_id=session.user_id, content=comment_in.content
    )


@router.delete("/{comment_id}", response_model=List[Comment])
async def delete_existing_comment(
    *,
    db: AsyncSession = Depends(get_db),
    session: SessionContext = Depends(require_session),
    comment_id: int,
) -> Any:
    return await comment_service.delete_comment(
        db=db, comment_id=comment_id, requester_id=session.user_id
    )
