from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from .settings import get_settings

settings = get_settings()

engine_kwargs = {"pool_pre_ping": True}
if settings.DATABASE_URL.startswith("sqlite"):
    # aiosqlite connections are bound to the event loop that opened them
    engine_kwargs["poolclass"] = NullPool

# Create the async SQLAlchemy engine
engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

# Session factory
SessionLocal = async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

# Dependency for FastAPI routes
async def get_db():
    db: AsyncSession = SessionLocal()
    try:
        yield db
    finally:
        await db.close()
