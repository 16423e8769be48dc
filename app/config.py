import os
from functools import lru_cache
from typing import Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseModel):
    NAME: str = "Users API"
    DESCRIPTION: str = "Сервис для создания и получения учетных записей пользователей"
    VERSION: str = "0.1.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    DEBUG: bool = False
    MODE: str = "DEV"


class PasswordSettings(BaseModel):
    # Количество итераций PBKDF2 для новых хешей. Старые хеши хранят своё значение.
    ITERATIONS: int = Field(default=1_000_000, gt=0, le=2**31 - 1)


class LoggingSettings(BaseModel):
    LEVEL: str = "INFO"


class CORSSettings(BaseModel):
    ORIGINS: list[str] = ["http://localhost:3000"]


class DbSettings(BaseModel):
    HOST: str = "db"
    PORT: int = 5432
    USER: str = "user"
    PASSWORD: str = "password"
    NAME: str = "mydatabase"
    # Полный URL подключения, если задан, имеет приоритет над HOST/PORT/...
    URL: Optional[str] = None
    ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_RECYCLE: int = 3600
    POOL_PRE_PING: bool = True

    @property
    def url_psycopg(self) -> str:
        if self.URL:
            return self.URL
        return f"postgresql+psycopg://{self.USER}:{self.PASSWORD}@{self.HOST}:{self.PORT}/{self.NAME}"

    def get_engine_kwargs(self) -> dict:
        """Формирует параметры для создания движка SQLAlchemy."""
        return {
            "url": self.url_psycopg,
            "echo": self.ECHO,
            "pool_size": self.POOL_SIZE,
            "max_overflow": self.MAX_OVERFLOW,
            "pool_recycle": self.POOL_RECYCLE,
            "pool_pre_ping": self.POOL_PRE_PING
        }


class Settings(BaseSettings):
    app: AppSettings = AppSettings()
    db: DbSettings = DbSettings()
    password: PasswordSettings = PasswordSettings()
    logging: LoggingSettings = LoggingSettings()
    cors: CORSSettings = CORSSettings()

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
        env_prefix=""
    )


# Создадим кеш для функции создания объекта класса Settings
@lru_cache()
def get_settings() -> Settings:
    return Settings()


# Создадим объект настроек
settings = get_settings()
