from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base_model import Base, dt_created, dt_updated, int_pk, str_uniq


class User(Base):
    __tablename__ = "users"

    id: Mapped[int_pk]
    first_name: Mapped[str]
    last_name: Mapped[str]
    email: Mapped[str_uniq]
    # Строка формата algorithm:iterations:salt:digest, хранится как есть
    hashed_password: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[dt_created]
    updated_at: Mapped[dt_updated]
