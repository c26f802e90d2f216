from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret_key: str
    password_pepper: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    database_url: str = "postgresql://localhost:5432/jobly"
    db_min_pool_size: int = 5
    db_max_pool_size: int = 20

    @property
    def sqlalchemy_database_url(self) -> str:
        """SQLAlchemy async 엔진용 URL (asyncpg 드라이버)"""
        scheme, _, rest = self.database_url.partition("://")
        if "+" in scheme:
            return self.database_url
        return f"postgresql+asyncpg://{rest}"


settings = Settings()
