from typing import List, Optional, Any
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models import User
from app.models.base_model import utc_now

def get_by_id(session: Session, user_id: int) -> Optional[User]:
    """Получить пользователя по ID."""
    return session.get(User, user_id)

def get_by_email(session: Session, email: str) -> Optional[User]:
    """Получить пользователя по email."""
    query = select(User).where(User.email == email)
    result = session.execute(query)
    return result.scalar_one_or_none()

def get_list(session: Session, limit: int, offset: int) -> List[User]:
    """Получить страницу пользователей, новые первыми."""
    query = (
        select(User)
        .order_by(User.created_at.desc(), User.id.desc())
        .limit(limit)
        .offset(offset)
    )
    result = session.execute(query)
    return list(result.scalars().all())

def create(session: Session, user: User) -> User:
    """Создать нового пользователя."""
    session.add(user)
    session.flush()
    return user

def delete(session: Session, user: User) -> None:
    """Удалить пользователя."""
    session.delete(user)
    session.flush()

def update(session: Session, user: User, update_data: dict[str, Any]) -> User:
    """Обновить данные пользователя."""
    for key, value in update_data.items():
        setattr(user, key, value)
    # Метка обновления ставится всегда, даже если значения полей не изменились
    user.updated_at = utc_now()
    session.flush()
    return user
