import logging
import os
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy.engine import Engine, URL
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, SQLModel, Session

logger = logging.getLogger(__name__)

# Carrega variáveis de ambiente do .env antes de montar a URL
try:
    from dotenv import load_dotenv
    project_root = Path(__file__).resolve().parent.parent.parent
    load_dotenv(project_root / ".env")
    load_dotenv(".env")
except Exception:
    pass


def get_database_url() -> str:
    """
    URL do banco: DATABASE_URL tem prioridade; senão monta a partir de DB_HOST, DB_PORT,
    DB_USER, DB_PASSWORD e DB_NAME (driver psycopg 3).
    """
    raw_url = os.getenv("DATABASE_URL")
    if raw_url:
        # postgresql:// sem driver faria o SQLAlchemy procurar psycopg2
        if raw_url.startswith("postgresql://"):
            raw_url = raw_url.replace("postgresql://", "postgresql+psycopg://", 1)
        return raw_url

    url = URL.create(
        "postgresql+psycopg",
        username=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASSWORD") or None,
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        database=os.getenv("DB_NAME", "inscricoes"),
    )
    return url.render_as_string(hide_password=False)


def build_engine(database_url: str) -> Engine:
    """
    Cria o engine com pool limitado. Quando o pool esgota, as requisições esperam na fila
    por até DB_POOL_TIMEOUT segundos em vez de falhar na hora.
    """
    if database_url.startswith("sqlite"):
        # SQLite em memória: uma única conexão compartilhada entre threads
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url,
        echo=False,
        pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
        max_overflow=0,
        pool_timeout=float(os.getenv("DB_POOL_TIMEOUT", "30")),
        pool_pre_ping=True,
        pool_recycle=300,
    )


# Engine singleton, criado no primeiro uso
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = build_engine(get_database_url())
    return _engine


def dispose_engine() -> None:
    """Fecha as conexões do pool (shutdown da aplicação)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
        logger.info("Pool de conexões encerrado")


def get_session() -> Generator[Session, None, None]:
    """Dependency do FastAPI para obter sessão do banco."""
    with Session(get_engine()) as session:
        yield session


def create_tables(engine: Optional[Engine] = None):
    """Cria todas as tabelas (útil para testes e ambiente local)."""
    import app.model  # noqa: F401  registra os modelos no metadata

    SQLModel.metadata.create_all(engine or get_engine())
