# app/database/db_connection.py

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from app.utils.logger import logger

# Base única para todos os models
Base = declarative_base()


class DatabaseProvider:
    """
    Fornece sessões ORM sobre um pool de conexões.

    O pool é aberto explicitamente (`open`) na subida da aplicação e
    descartado (`close`) no encerramento. A instância é guardada em
    `app.state.db` e injetada nas rotas via `get_db`.
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    def open(self) -> "DatabaseProvider":
        if self.engine is not None:
            return self

        kwargs = dict(self.engine_kwargs)
        if self.url.startswith("postgresql"):
            kwargs.setdefault("pool_pre_ping", True)
            kwargs.setdefault("connect_args", {"options": "-c timezone=America/Sao_Paulo"})

        self.engine = create_engine(self.url, **kwargs)
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )
        logger.info(f"[DB] Pool de conexões aberto ({self.engine.dialect.name}).")
        return self

    def close(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("[DB] Pool de conexões encerrado.")

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("DatabaseProvider não foi aberto (chame open() antes).")
        return self._session_factory()

    @contextmanager
    def sessao(self) -> Iterator[Session]:
        """Sessão com commit no sucesso, rollback na falha e close sempre."""
        db = self.session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


# Dependency para FastAPI
def get_db(request: Request) -> Iterator[Session]:
    provider: DatabaseProvider = request.app.state.db
    db = provider.session()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
