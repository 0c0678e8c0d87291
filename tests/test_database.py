"""
Testes para app/database.py

Cobre:
- engine é criada com a URL configurada
- async_session_factory retorna sessões AsyncSession
- get_session faz commit ao final do request
- get_session faz rollback em caso de exceção
- init_db cria todas as tabelas
- init_db é idempotente
- close_db libera o pool da engine
- insert_ignore: ON CONFLICT DO NOTHING em SQLite/PostgreSQL, erro claro nos demais
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool


async def _table_names(engine) -> list[str]:
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


# ---------------------------------------------------------------------------
# Engine e fábrica de sessões
# ---------------------------------------------------------------------------


def test_engine_is_async_engine():
    from app.database import engine

    assert isinstance(engine, AsyncEngine)


def test_engine_uses_configured_url():
    """engine deve usar a URL definida em settings.database_url."""
    from app.config import settings
    from app.database import engine

    assert engine.url.render_as_string(hide_password=False) == settings.database_url


def test_async_session_factory_is_sessionmaker():
    from app.database import async_session_factory

    assert isinstance(async_session_factory, async_sessionmaker)


@pytest.mark.asyncio
async def test_session_factory_produces_async_session(session_factory):
    async with session_factory() as s:
        assert isinstance(s, AsyncSession)


# ---------------------------------------------------------------------------
# get_session
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_session_commits_on_success(session_factory):
    """Ao sair sem exceção, get_session confirma o que foi adicionado."""
    from app.database import get_session
    from app.models.user import User

    with patch("app.database.async_session_factory", session_factory):
        gen = get_session()
        s = await gen.__anext__()
        s.add(User(username="alice", email="a@x.com", password_hash="x"))
        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()

    async with session_factory() as verify:
        assert await verify.scalar(select(User).where(User.username == "alice")) is not None


@pytest.mark.asyncio
async def test_get_session_rollback_on_exception(session_factory):
    """Quando o request falha, nada do que foi adicionado é persistido."""
    from app.database import get_session
    from app.models.user import User

    with patch("app.database.async_session_factory", session_factory):
        gen = get_session()
        s = await gen.__anext__()
        s.add(User(username="alice", email="a@x.com", password_hash="x"))
        await s.flush()
        with pytest.raises(RuntimeError):
            await gen.athrow(RuntimeError("erro simulado"))

    async with session_factory() as verify:
        assert await verify.scalar(select(User).where(User.username == "alice")) is None


# ---------------------------------------------------------------------------
# init_db / close_db
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_init_db_creates_tables():
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )

    with patch("app.database.engine", test_engine):
        from app.database import init_db

        await init_db()

    tables = await _table_names(test_engine)
    assert {"users", "follows", "posts", "post_likes", "comments", "notifications"} <= set(tables)

    await test_engine.dispose()


@pytest.mark.asyncio
async def test_init_db_is_idempotent():
    """Chamar init_db duas vezes não deve causar erro (tabelas já existentes)."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )

    with patch("app.database.engine", test_engine):
        from app.database import init_db

        await init_db()
        await init_db()

    await test_engine.dispose()


@pytest.mark.asyncio
async def test_close_db_disposes_engine():
    fake_engine = AsyncMock()

    with patch("app.database.engine", fake_engine):
        from app.database import close_db

        await close_db()

    fake_engine.dispose.assert_awaited_once()


# ---------------------------------------------------------------------------
# insert_ignore
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("dialect", ["sqlite", "postgresql"])
def test_insert_ignore_renders_on_conflict(dialect):
    from sqlalchemy.dialects import postgresql, sqlite

    from app.database import insert_ignore
    from app.models.follow import Follow

    fake_session = MagicMock()
    fake_session.bind.dialect.name = dialect
    compile_dialect = {"sqlite": sqlite, "postgresql": postgresql}[dialect].dialect()

    stmt = insert_ignore(fake_session, Follow)

    assert "ON CONFLICT DO NOTHING" in str(stmt.compile(dialect=compile_dialect))


def test_insert_ignore_unsupported_dialect_raises():
    from app.database import insert_ignore
    from app.models.follow import Follow

    fake_session = MagicMock()
    fake_session.bind.dialect.name = "mysql"

    with pytest.raises(NotImplementedError, match="mysql"):
        insert_ignore(fake_session, Follow)
