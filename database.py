from typing import AsyncGenerator, Annotated
from fastapi import Depends
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.ext.asyncio.engine import create_async_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession, AsyncEngine

from config import settings


# Base class for all databases to create with one command
class Base(DeclarativeBase):
    pass


class Database:
    def __init__(self, url: str | None = settings.database_url) -> None:
        if not url:
            raise ValueError("URL of database not found")

        self.engine: AsyncEngine = create_async_engine(url=url)
        self.session: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, expire_on_commit=False
        )

    def get_engine(self) -> AsyncEngine:
        return self.engine

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session() as ses:
            yield ses

    async def create_all_tables(self) -> None:
        # models must be imported so their tables are registered on Base.metadata
        import models.usermodel  # noqa: F401
        import models.notesmodel  # noqa: F401

        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


db = Database()
sessionDep = Annotated[AsyncSession, Depends(db.get_session)]
