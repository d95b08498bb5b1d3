"""
Fixtures compartidas para Pytest.
Configura base de datos de test, usuarios por rol y clientes HTTP.
"""

import os

# Antes de importar la app: get_settings() queda cacheado
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "development"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["INIT_SECRET"] = "test-init-secret"
os.environ["ENFORCE_STATUS_TRANSITIONS"] = "false"

from collections.abc import AsyncGenerator  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app.auth.jwt import create_access_token  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.laboratory import Laboratory  # noqa: E402
from app.models.user import User, UserRole, UserStatus  # noqa: E402

TEST_PASSWORD = "Password123!"

# ── Engine de test (SQLite async) ────────────────────
TEST_DATABASE_URL = os.environ["DATABASE_URL"]

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
test_session_factory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


@pytest_asyncio.fixture(autouse=True)
async def setup_database():
    """Crea y destruye las tablas para cada test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provee una sesión de DB de test."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP de test que usa la DB de test."""

    async def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def isolated_client() -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP con una sesión y transacción propias por petición, como en producción."""

    async def _get_request_db():
        async with test_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_request_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ── Helpers ──────────────────────────────────────────
def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


async def make_lab(db: AsyncSession, name: str) -> Laboratory:
    lab = Laboratory(
        name=name,
        address="Calle Falsa 123",
        phone="555-0000",
        email=None,
        status=UserStatus.ACTIVE,
    )
    db.add(lab)
    await db.commit()
    await db.refresh(lab)
    return lab


async def make_user(
    db: AsyncSession,
    name: str,
    email: str,
    role: UserRole,
    lab_id: UUID | None = None,
    status: UserStatus = UserStatus.ACTIVE,
) -> User:
    user = User(
        name=name,
        email=email,
        password=hash_password(TEST_PASSWORD),
        phone="5550000000",
        role=role,
        status=status,
        lab_id=lab_id,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def order_payload(**overrides) -> dict:
    payload = {
        "services": ["corona"],
        "odontograma": {"11": ["corona"]},
        "nombrePaciente": "Juan Pérez",
        "value": "150.00",
    }
    payload.update(overrides)
    return payload


# ── Laboratorios ─────────────────────────────────────
@pytest_asyncio.fixture
async def lab1(db_session: AsyncSession) -> Laboratory:
    return await make_lab(db_session, "Laboratorio Uno")


@pytest_asyncio.fixture
async def lab2(db_session: AsyncSession) -> Laboratory:
    return await make_lab(db_session, "Laboratorio Dos")


# ── Usuarios por rol ─────────────────────────────────
@pytest_asyncio.fixture
async def superadmin(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Super Admin", "admin@test.com", UserRole.SUPERADMIN)


@pytest_asyncio.fixture
async def lab_user(db_session: AsyncSession, lab1: Laboratory) -> User:
    return await make_user(
        db_session, "Lab Uno", "lab1@test.com", UserRole.LABORATORIO, lab1.id
    )


@pytest_asyncio.fixture
async def lab2_user(db_session: AsyncSession, lab2: Laboratory) -> User:
    return await make_user(
        db_session, "Lab Dos", "lab2@test.com", UserRole.LABORATORIO, lab2.id
    )


@pytest_asyncio.fixture
async def doctor(db_session: AsyncSession, lab1: Laboratory) -> User:
    return await make_user(
        db_session, "Dra. Ana", "ana@test.com", UserRole.DOCTOR, lab1.id
    )


@pytest_asyncio.fixture
async def doctor_b(db_session: AsyncSession, lab1: Laboratory) -> User:
    return await make_user(
        db_session, "Dr. Beto", "beto@test.com", UserRole.DOCTOR, lab1.id
    )


@pytest_asyncio.fixture
async def other_lab_doctor(db_session: AsyncSession, lab2: Laboratory) -> User:
    return await make_user(
        db_session, "Dr. Carlos", "carlos@test.com", UserRole.DOCTOR, lab2.id
    )
