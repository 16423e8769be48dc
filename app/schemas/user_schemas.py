from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from app.schemas.base_schema import SBase


class SUserCreate(SBase):
    email: EmailStr = Field(..., description="Электронная почта")
    password: str = Field(..., min_length=8, max_length=128, description="Пароль, от 8 до 128 знаков")
    first_name: str = Field(..., min_length=1, max_length=50, description="Имя, до 50 символов")
    last_name: str = Field(..., min_length=1, max_length=50, description="Фамилия, до 50 символов")


class SUser(SBase):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime


class SUserUpdate(SBase):
    email: Optional[EmailStr] = Field(None, description="Электронная почта")
    # Отсутствие пароля оставляет прежний хеш, пустая строка не проходит валидацию
    password: Optional[str] = Field(None, min_length=8, max_length=128, description="Новый пароль")
    first_name: Optional[str] = Field(None, min_length=1, max_length=50, description="Имя")
    last_name: Optional[str] = Field(None, min_length=1, max_length=50, description="Фамилия")
