from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from typing import AsyncGenerator

from app.core.config import settings


def enable_sqlite_foreign_keys(sync_engine: Engine) -> None:
    # SQLite ignores ON DELETE CASCADE unless the pragma is on per connection
    @event.listens_for(sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    settings.ASYNC_DATABASE_URL, echo=settings.DB_ECHO, pool_pre_ping=True
)
if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine.sync_engine)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
