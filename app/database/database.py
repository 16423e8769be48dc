import logging

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from app.config import settings
from app.models import Base

logger = logging.getLogger(__name__)


# Настройка движка и фабрики сессий
engine_kwargs = settings.db.get_engine_kwargs()
logger.info(f"Подключение к БД (хост: {settings.db.HOST})")

engine: Engine = create_engine(**engine_kwargs)
session_maker = sessionmaker(engine, expire_on_commit=False)


# Генератор сессий (для инъекций фастапи)
def get_session() -> Generator[Session, None, None]:
    with session_maker() as session:
        yield session


# Инциализация БД
def init_db(drop_all: bool = False):
    try:
        if drop_all:
            Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
        logger.info("Таблицы базы данных успешно инициализированы.")
    except Exception as e:
        logger.error(f"Ошибка при инициализации базы данных: {e}")
        raise
