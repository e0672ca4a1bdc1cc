# services/dimensao_service.py
from sqlalchemy.orm import Session

from models.familia import Familia
from models.setor import Setor
from models.turno import Turno


def list_turnos(db: Session) -> list[Turno]:
    return db.query(Turno).order_by(Turno.turnoid).all()


def list_setores(db: Session) -> list[Setor]:
    return db.query(Setor).order_by(Setor.setorid).all()


def list_familias(db: Session) -> list[Familia]:
    return db.query(Familia).order_by(Familia.familiaid).all()
