# utils/transactions.py
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from utils.db import SessionLocal, db_error_code

logger = logging.getLogger(__name__)


@contextmanager
def uow(session: Session | None = None, label: str = "uow"):
    """
    Bloco transacional: commit ao sair, rollback em qualquer erro.

        with uow(label="seeds") as db:
            db.add(Turno(turnonome="Manhã"))

    Com `session` informada a sessão é reaproveitada e continua aberta
    no fim; sem ela, uma sessão própria é aberta e fechada aqui.
    """
    owns_session = session is None
    db = session if session is not None else SessionLocal()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        logger.error("[DB_ERR] %s %s: %s", label, db_error_code(exc), exc)
        db.rollback()
        raise
    except Exception:
        logger.warning("%s: rollback", label)
        db.rollback()
        raise
    finally:
        if owns_session:
            db.close()
