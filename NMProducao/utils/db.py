import logging

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import settings

logger = logging.getLogger(__name__)

# ───────────────────────────────────────────────
# Convenção de nomes para constraints / índices
# ───────────────────────────────────────────────
convention = {
    "ix": "ix_%(table_name)s_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _engine_kwargs(url: str, pool_max: int, ssl: bool) -> dict:
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # Banco em memória: todas as sessões enxergam a mesma conexão
            kwargs["poolclass"] = StaticPool
        return kwargs

    connect_args: dict = {"connect_timeout": 10}
    if ssl:
        connect_args["sslmode"] = "require"
    return {
        "pool_size": pool_max,
        "max_overflow": 0,
        "pool_timeout": 10,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "connect_args": connect_args,
    }


engine = create_engine(
    settings.DATABASE_URL,
    future=True,
    **_engine_kwargs(settings.DATABASE_URL, settings.PG_POOL_MAX, settings.database_requires_ssl),
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@event.listens_for(Engine, "connect")
def _sqlite_foreign_keys(dbapi_conn, _record):
    # SQLite só valida FKs com o pragma ligado
    if type(dbapi_conn).__module__.startswith("sqlite3"):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Base(DeclarativeBase):
    """Classe base de todos os modelos ORM."""
    metadata = MetaData(naming_convention=convention)


def db_error_code(exc: BaseException) -> str:
    """Código de erro do banco (SQLSTATE no Postgres) ou 'ERR'."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None)
    return str(code) if code else "ERR"


def get_db():
    """
    Sessão por requisição. Todo acesso ao banco passa por aqui:
    erros são registrados e relançados, e a conexão sempre volta ao pool.
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as exc:
        logger.error("[DB_ERR] %s %s", db_error_code(exc), exc)
        db.rollback()
        raise
    finally:
        db.close()
