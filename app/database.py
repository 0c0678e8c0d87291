"""
app/database.py

Configuração do banco de dados via SQLAlchemy assíncrono.

Exporta:
- `engine`                — engine assíncrona compartilhada pelo processo
- `async_session_factory` — fábrica de sessões para uso nos serviços
- `Base`                  — classe base para os modelos ORM
- `get_session()`         — dependência FastAPI que fornece sessão por request
- `insert_ignore()`       — INSERT ... ON CONFLICT DO NOTHING no dialeto da sessão
- `init_db()`             — cria as tabelas na inicialização da aplicação
- `close_db()`            — libera o pool de conexões no shutdown
"""

from typing import AsyncGenerator

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

# check_same_thread só existe no driver SQLite
_connect_args = (
    {"check_same_thread": False}
    if settings.database_url.startswith("sqlite")
    else {}
)

# A engine não abre conexões até o primeiro uso
engine = create_async_engine(
    settings.database_url,
    echo=False,
    connect_args=_connect_args,
)

# ---------------------------------------------------------------------------
# Fábrica de sessões
# ---------------------------------------------------------------------------

# Nome distinto de AsyncSession (classe) para evitar colisão no mesmo módulo
async_session_factory = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,  # evita lazy-load após commit em contexto assíncrono
    class_=AsyncSession,
)


# ---------------------------------------------------------------------------
# Base declarativa
# ---------------------------------------------------------------------------

class Base(DeclarativeBase):
    pass


# ---------------------------------------------------------------------------
# Dependência FastAPI
# ---------------------------------------------------------------------------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependência FastAPI que fornece uma sessão de banco por request.

    Faz commit ao final em caso de sucesso e rollback em caso de exceção.
    Os serviços podem fazer commits intermediários (ex: antes de emitir
    notificações), então a sessão não é aberta com `session.begin()`.

    Deve ser usada com `Depends(get_session, scope="function")`: no escopo
    padrão o código após o `yield` só roda depois que a resposta já saiu,
    e o cliente receberia 2xx antes do commit.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ---------------------------------------------------------------------------
# INSERT idempotente
# ---------------------------------------------------------------------------

_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


def insert_ignore(session: AsyncSession, model):
    """
    INSERT ... ON CONFLICT DO NOTHING no dialeto da sessão.

    Só SQLite e PostgreSQL têm essa cláusula aqui; outro dialeto na
    DATABASE_URL levanta NotImplementedError logo na montagem do comando.
    """
    dialect = session.bind.dialect.name
    try:
        insert = _INSERTS[dialect]
    except KeyError:
        raise NotImplementedError(
            f"Dialeto '{dialect}' não suportado: use SQLite ou PostgreSQL"
        ) from None
    return insert(model.__table__).on_conflict_do_nothing()


# ---------------------------------------------------------------------------
# Ciclo de vida
# ---------------------------------------------------------------------------

async def init_db() -> None:
    """
    Cria todas as tabelas definidas nos modelos ORM caso ainda não existam.
    Deve ser chamado uma única vez no startup da aplicação (lifespan do FastAPI).
    """
    # Importa os modelos para que o SQLAlchemy os registre no metadata da Base
    # antes de criar as tabelas. Sem este import, as tabelas não serão criadas.
    from app.models import follow, notification, post, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Fecha todas as conexões do pool. Chamado no shutdown da aplicação."""
    await engine.dispose()
