import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from factories import make_user
from homemadefood.domain.models import User, UserRole
from homemadefood.infrastructure.database import Base, get_db
from homemadefood.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def client(session):
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.meal_providers = []
    app.state.recipe_sources = []
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def customer(session) -> User:
    return make_user(session)


@pytest.fixture
def other_customer(session) -> User:
    return make_user(session, name="Bilal", email="bilal@example.com")


@pytest.fixture
def admin(session) -> User:
    return make_user(session, name="Admin", email="admin@example.com", role=UserRole.ADMIN)
