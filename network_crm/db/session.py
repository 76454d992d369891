from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from network_crm.core.config import settings

database_url = str(settings.DATABASE_URL)

# Pool sizing only applies to the PostgreSQL driver
engine_kwargs = {}
if database_url.startswith("postgresql"):
    engine_kwargs = {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 10,
        "max_overflow": 20,
    }

# Security: SQL query logging only in development mode
engine = create_async_engine(database_url, echo=settings.is_dev_mode, **engine_kwargs)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
