from datetime import datetime

import pytest

from app.crud import user as user_crud
from app.models import User
from app.schemas import SUserCreate, SUserUpdate
from app.services.user_service import UserService
from app.utils import (
    EmptyInputException,
    InternalServerErrorException,
    UserAlreadyExistsException,
    UserIsNotPresentException,
)


def _user_data(**overrides) -> SUserCreate:
    data = {
        "email": "test@example.com",
        "password": "password123",
        "first_name": "Test",
        "last_name": "User",
    }
    data.update(overrides)
    return SUserCreate(**data)


def test_create_user(session, hasher):
    service = UserService(session, hasher)
    user = service.create_user(_user_data())

    assert user.id is not None
    assert user.email == "test@example.com"
    assert user.created_at is not None

    # Проверка загрузки из БД по ID
    loaded_user = service.get_user_by_id(user.id)
    assert loaded_user is not None
    assert loaded_user.email == "test@example.com"


def test_create_user_hashes_password(session, hasher):
    service = UserService(session, hasher)
    user = service.create_user(_user_data())

    assert user.hashed_password != "password123"
    assert user.hashed_password.startswith("pbkdf2-sha256:1000:")
    assert hasher.verify_hash("password123", user.hashed_password) is True


def test_create_user_duplicate_email(session, hasher):
    service = UserService(session, hasher)
    service.create_user(_user_data())

    with pytest.raises(UserAlreadyExistsException):
        service.create_user(_user_data(first_name="Other"))


def test_get_user_by_email(session, hasher):
    service = UserService(session, hasher)
    service.create_user(_user_data(email="email@example.com", first_name="Email"))

    user = service.get_user_by_email("email@example.com")
    assert user is not None
    assert user.first_name == "Email"
    assert service.get_user_by_email("missing@example.com") is None


def test_get_user_not_found(session, hasher):
    service = UserService(session, hasher)
    assert service.get_user_by_id(999) is None
    with pytest.raises(UserIsNotPresentException):
        service.get_user(999)


def test_list_users_order_and_pagination(session, hasher):
    service = UserService(session, hasher)
    for i in range(3):
        service.create_user(_user_data(email=f"user{i}@example.com"))

    users = service.list_users(limit=10, offset=0)
    assert [u.email for u in users] == ["user2@example.com", "user1@example.com", "user0@example.com"]

    page = service.list_users(limit=1, offset=1)
    assert [u.email for u in page] == ["user1@example.com"]


def test_update_user_fields(session, hasher):
    service = UserService(session, hasher)
    user = service.create_user(_user_data())
    old_hash = user.hashed_password

    updated_user = service.update_user(user.id, SUserUpdate(first_name="UpdatedName"))

    assert updated_user.first_name == "UpdatedName"
    assert updated_user.last_name == "User"  # Не должно измениться
    assert updated_user.hashed_password == old_hash


def test_update_user_password_rehashes(session, hasher):
    service = UserService(session, hasher)
    user = service.create_user(_user_data())
    old_hash = user.hashed_password

    updated_user = service.update_user(user.id, SUserUpdate(password="newpassword456"))

    assert updated_user.hashed_password != old_hash
    assert service.check_password(updated_user, "newpassword456") is True
    assert service.check_password(updated_user, "password123") is False


def test_update_user_null_password_keeps_hash(session, hasher):
    service = UserService(session, hasher)
    user = service.create_user(_user_data())
    old_hash = user.hashed_password

    updated_user = service.update_user(user.id, SUserUpdate(password=None, last_name="Changed"))

    assert updated_user.hashed_password == old_hash
    assert updated_user.last_name == "Changed"


def test_update_user_email_conflict(session, hasher):
    service = UserService(session, hasher)
    service.create_user(_user_data(email="first@example.com"))
    second = service.create_user(_user_data(email="second@example.com"))

    with pytest.raises(UserAlreadyExistsException):
        service.update_user(second.id, SUserUpdate(email="first@example.com"))


def test_update_user_not_found(session, hasher):
    service = UserService(session, hasher)
    with pytest.raises(UserIsNotPresentException):
        service.update_user(999, SUserUpdate(first_name="Nobody"))


def test_delete_user(session, hasher):
    service = UserService(session, hasher)
    user = service.create_user(_user_data())

    service.delete_user(user.id)

    assert service.get_user_by_id(user.id) is None
    with pytest.raises(UserIsNotPresentException):
        service.delete_user(user.id)


def test_check_password(session, hasher, test_user):
    service = UserService(session, hasher)
    assert service.check_password(test_user, "password123") is True
    assert service.check_password(test_user, "wrongpassword") is False


def test_check_password_empty(session, hasher, test_user):
    service = UserService(session, hasher)
    with pytest.raises(EmptyInputException):
        service.check_password(test_user, "")


@pytest.mark.parametrize("stored", [
    "not:a:valid",
    "scrypt-whatever:1:AA:BB",
    "pbkdf2-sha256:0:AA:BB",
    "pbkdf2-sha256:9999999999:AAAA:AAAA",
])
def test_check_password_corrupt_hash(session, hasher, stored):
    service = UserService(session, hasher)
    user = User(email="corrupt@example.com", first_name="C", last_name="H", hashed_password=stored)

    with pytest.raises(InternalServerErrorException):
        service.check_password(user, "password123")


def test_default_hasher_uses_settings(session):
    service = UserService(session)
    # PASSWORD__ITERATIONS задан в conftest
    assert service.hasher.iterations == 1000


OLD_TIMESTAMP = datetime(2000, 1, 1)


def _make_stale(session, user: User) -> None:
    user.updated_at = OLD_TIMESTAMP
    session.commit()


@pytest.mark.parametrize("update", [
    SUserUpdate(first_name="Renamed"),
    SUserUpdate(password="newpassword456"),
    SUserUpdate(),
    SUserUpdate(last_name=None),
])
def test_update_user_bumps_updated_at(session, hasher, update):
    service = UserService(session, hasher)
    user = service.create_user(_user_data())
    _make_stale(session, user)

    service.update_user(user.id, update)

    session.refresh(user)
    assert user.updated_at > OLD_TIMESTAMP


def test_create_user_unique_violation_is_conflict(session, hasher, monkeypatch):
    """Параллельная вставка: предварительная проверка не видит дубликат, срабатывает индекс."""
    service = UserService(session, hasher)
    service.create_user(_user_data())

    monkeypatch.setattr(user_crud, "get_by_email", lambda session, email: None)
    with pytest.raises(UserAlreadyExistsException):
        service.create_user(_user_data(first_name="Other"))

    # Сессия после отката остается рабочей
    assert len(service.list_users(limit=10, offset=0)) == 1


def test_update_user_unique_violation_is_conflict(session, hasher, monkeypatch):
    service = UserService(session, hasher)
    service.create_user(_user_data(email="first@example.com"))
    second = service.create_user(_user_data(email="second@example.com"))

    monkeypatch.setattr(user_crud, "get_by_email", lambda session, email: None)
    with pytest.raises(UserAlreadyExistsException):
        service.update_user(second.id, SUserUpdate(email="first@example.com"))
