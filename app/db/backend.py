import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BackendError, Conflict

logger = logging.getLogger(__name__)


def _error_message(ex: SQLAlchemyError) -> str:
    orig = getattr(ex, "orig", None)
    return str(orig) if orig is not None else str(ex)


@asynccontextmanager
async def backend_call(db: AsyncSession, action: str) -> AsyncIterator[None]:
    """
    One storage round trip: everything staged inside the block is committed
    on exit. Earlier calls stay committed when a later one fails.
    """
    try:
        yield
        await db.commit()
    except IntegrityError as ex:
        await db.rollback()
        logger.warning(f"{action} rejected by a constraint: {_error_message(ex)}")
        raise Conflict(f"{action} conflicts with existing data") from ex
    except SQLAlchemyError as ex:
        await db.rollback()
        logger.error(f"{action} failed: {ex}")
        raise BackendError(_error_message(ex)) from ex
