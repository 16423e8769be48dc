import os

# Устанавливаем режим тестирования до загрузки приложения
os.environ["APP__MODE"] = "TEST"
# Низкая стоимость хеширования, чтобы тесты шли быстро
os.environ["PASSWORD__ITERATIONS"] = "1000"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from app.auth.hash_password import HashPassword
from app.models import Base
from app.database import get_session
from app.main import app

# Используем SQLite в памяти для тестов
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
TEST_ITERATIONS = 1000


@pytest.fixture(scope="function")
def engine():
    # Новая БД на каждый тест: сервисы сами делают commit/rollback
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def session(engine):
    Session = sessionmaker(bind=engine, expire_on_commit=False)
    session = Session()
    yield session
    session.close()

@pytest.fixture(scope="function")
def hasher():
    return HashPassword(iterations=TEST_ITERATIONS)

@pytest.fixture(scope="function")
def client(session):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as c:
        yield c

    # Чистим переопределения
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_user(session, hasher):
    """Фикстура для создания тестового пользователя."""
    from app.models import User
    user = User(
        email="test_user@example.com",
        hashed_password=hasher.create_hash("password123"),
        first_name="Test",
        last_name="User",
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
