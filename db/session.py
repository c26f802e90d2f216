from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from config import settings

# 스키마 생성 / 시드 전용 (API 요청은 utils.database의 asyncpg pool 사용)
engine = create_async_engine(settings.sqlalchemy_database_url, pool_pre_ping=True)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
