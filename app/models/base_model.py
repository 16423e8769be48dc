from datetime import datetime, timezone
from typing import Annotated

from sqlalchemy import func
from sqlalchemy.orm import DeclarativeBase, mapped_column

# Базовый класс для моделей
class Base(DeclarativeBase):
    def __repr__(self):
        cols = [f"{col}={getattr(self, col)}" for col in self.__table__.columns.keys()]
        return f"<{self.__class__.__name__}({', '.join(cols)})>"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Аннотации для часто используемых типов колонок
int_pk = Annotated[int, mapped_column(primary_key=True)]
str_uniq = Annotated[str, mapped_column(unique=True, nullable=False)]
dt_created = Annotated[datetime, mapped_column(default=utc_now, server_default=func.now(), nullable=False, index=True)]
dt_updated = Annotated[datetime, mapped_column(default=utc_now, server_default=func.now(), onupdate=utc_now, nullable=False)]
