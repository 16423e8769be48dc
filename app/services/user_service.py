import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.hash_password import HashPassword, get_hasher
from app.crud import user as user_crud
from app.models import User
from app.schemas import SUserCreate, SUserUpdate
from app.utils import (
    InternalServerErrorException,
    MalformedHashException,
    UnsupportedAlgorithmException,
    UserAlreadyExistsException,
    UserIsNotPresentException,
    transactional,
)

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: Session, hasher: Optional[HashPassword] = None) -> None:
        self.session = session
        self.hasher = hasher or get_hasher()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return user_crud.get_by_id(self.session, user_id)

    def get_user(self, user_id: int) -> User:
        """
        Получить пользователя по ID.

        Raises:
            UserIsNotPresentException: Если пользователь не найден
        """
        user = user_crud.get_by_id(self.session, user_id)
        if not user:
            raise UserIsNotPresentException
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        return user_crud.get_by_email(self.session, email)

    def list_users(self, limit: int, offset: int) -> List[User]:
        return user_crud.get_list(self.session, limit, offset)

    @transactional
    def create_user(self, user_data: SUserCreate) -> User:
        """
        Создать нового пользователя.

        Пароль хешируется до записи в БД, открытый пароль не сохраняется.

        Raises:
            UserAlreadyExistsException: Если пользователь с таким email уже существует
        """
        if user_crud.get_by_email(self.session, user_data.email):
            raise UserAlreadyExistsException

        user_dict = user_data.model_dump()
        password = user_dict.pop("password")
        user_dict["hashed_password"] = self.hasher.create_hash(password)

        # Проверка выше не защищает от параллельной вставки, её ловит уникальный индекс
        try:
            user = user_crud.create(self.session, User(**user_dict))
        except IntegrityError as e:
            logger.warning(f"Unique constraint violated on user create: {e.orig}")
            raise UserAlreadyExistsException from e
        logger.info(f"User created: id={user.id}")
        return user

    @transactional
    def update_user(self, user_id: int, user_update: SUserUpdate) -> User:
        """
        Частично обновить пользователя.

        Поля, которые не переданы или равны None, не меняются. Новый пароль
        хешируется заново и целиком заменяет прежний хеш.

        Raises:
            UserIsNotPresentException: Если пользователь не найден
            UserAlreadyExistsException: Если email занят другим пользователем
        """
        user = user_crud.get_by_id(self.session, user_id)
        if not user:
            raise UserIsNotPresentException

        update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)

        new_email = update_data.get("email")
        if new_email and new_email != user.email:
            existing = user_crud.get_by_email(self.session, new_email)
            if existing and existing.id != user.id:
                raise UserAlreadyExistsException

        password = update_data.pop("password", None)
        if password:
            update_data["hashed_password"] = self.hasher.create_hash(password)

        try:
            user_crud.update(self.session, user, update_data)
        except IntegrityError as e:
            logger.warning(f"Unique constraint violated on user update: id={user_id}: {e.orig}")
            raise UserAlreadyExistsException from e
        logger.info(f"User updated: id={user.id}, fields={sorted(update_data)}")
        return user

    @transactional
    def delete_user(self, user_id: int) -> None:
        """
        Удалить пользователя.

        Raises:
            UserIsNotPresentException: Если пользователь не найден
        """
        user = user_crud.get_by_id(self.session, user_id)
        if not user:
            raise UserIsNotPresentException

        user_crud.delete(self.session, user)
        logger.info(f"User deleted: id={user_id}")

    def check_password(self, user: User, password: str) -> bool:
        """
        Проверить пароль пользователя.

        Неверный пароль возвращает False. Поврежденный хеш в БД считается
        внутренней ошибкой, а не неверным паролем.

        Raises:
            InternalServerErrorException: Если сохраненный хеш поврежден или устарел
        """
        try:
            matched = self.hasher.verify_hash(password, user.hashed_password)
        except (MalformedHashException, UnsupportedAlgorithmException) as e:
            logger.error(f"Stored password hash is invalid for user id={user.id}: {type(e).__name__}: {e}")
            raise InternalServerErrorException from e

        if not matched:
            logger.info(f"Password mismatch for user id={user.id}")
        return matched
