"""
Fixtures compartilhadas entre todos os testes.
"""

import os

# Definidas antes de qualquer import de `app`: o Dynaconf valida
# DATABASE_URL e SECRET_KEY no primeiro acesso às settings.
os.environ.setdefault("BAILANYSTA_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BAILANYSTA_SECRET_KEY", "test-secret-key")

from unittest.mock import AsyncMock, patch  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402


# ---------------------------------------------------------------------------
# Configuração Dynaconf isolada para testes
# Usa monkeypatch para sobrescrever os atributos sem tocar em arquivos .toml
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def patch_settings(monkeypatch):
    """
    Sobrescreve as settings do Dynaconf com valores de teste.
    `autouse=True` garante que nenhum teste use o segredo real nem o
    custo de produção do bcrypt.
    """
    from app import config

    monkeypatch.setattr(config.settings, "secret_key", "test-secret-key")
    monkeypatch.setattr(config.settings, "token_expire_days", 7)
    monkeypatch.setattr(config.settings, "bcrypt_rounds", 4)
    monkeypatch.setattr(config.settings, "notifications_limit", 20)


# ---------------------------------------------------------------------------
# Banco em memória isolado por teste
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def engine():
    """Engine SQLite em memória — uma única conexão compartilhada (StaticPool)."""
    from app.database import Base
    from app.models import follow, notification, post, user  # noqa: F401

    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user(session_factory):
    """Factory que registra um usuário numa sessão própria e confirma."""
    from app.services import accounts

    async def _make(username: str, email: str | None = None, password: str = "pw123456"):
        async with session_factory() as s:
            user = await accounts.register(
                s, username, email or f"{username}@x.com", password
            )
            await s.commit()
            return user

    return _make


@pytest.fixture
def auth_headers():
    """Monta o header Authorization para um usuário."""
    from app.security.tokens import issue_token

    def _headers(user) -> dict:
        return {"Authorization": f"Bearer {issue_token(user.id)}"}

    return _headers


# ---------------------------------------------------------------------------
# Cliente HTTP
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(session_factory):
    """
    Cliente httpx apontando para a app FastAPI, com `get_session`
    substituída por sessões do banco em memória do teste.
    """
    from app.database import get_session

    async def _test_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    with (
        patch("app.database.init_db", AsyncMock()),
        patch("app.database.close_db", AsyncMock()),
    ):
        from app.main import api

        api.dependency_overrides[get_session] = _test_session
        async with AsyncClient(
                transport=ASGITransport(app=api),
                base_url="http://test",
        ) as ac:
            yield ac
        api.dependency_overrides.clear()
