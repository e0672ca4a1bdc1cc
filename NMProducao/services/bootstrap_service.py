# services/bootstrap_service.py
"""
Criação idempotente do schema e carga inicial.

Roda a cada start: cria o que faltar e semeia um registro padrão em cada
dimensão (e um produto) somente se a tabela estiver vazia, para a API
sempre responder mesmo com banco em branco sem sobrescrever dados do
operador.
"""
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from enums.enums import AtivoEnum
from models import Base, Familia, Produto, Setor, Turno
from services.calculation_service import safe_cubagem
from utils.transactions import uow

logger = logging.getLogger(__name__)


def create_schema(engine: Engine) -> None:
    """CREATE TABLE/INDEX IF NOT EXISTS para as cinco tabelas."""
    Base.metadata.create_all(bind=engine, checkfirst=True)


def _is_empty(db: Session, model) -> bool:
    return db.query(model).first() is None


def seed_defaults(db: Session) -> list[str]:
    """Semeia padrões nas tabelas vazias; retorna os nomes das tabelas semeadas."""
    seeded = []

    if _is_empty(db, Turno):
        db.add(Turno(turnonome="Manhã"))
        seeded.append(Turno.__tablename__)

    if _is_empty(db, Setor):
        db.add(Setor(setornome="Geral"))
        seeded.append(Setor.__tablename__)

    if _is_empty(db, Familia):
        db.add(Familia(familianome="Padrão", sigla="PAD"))
        seeded.append(Familia.__tablename__)
    db.flush()

    if _is_empty(db, Produto):
        familia = db.query(Familia).order_by(Familia.familiaid).first()
        db.add(
            Produto(
                codigo="P001",
                descricao="Produto Padrão",
                familiaid=familia.familiaid,
                comprimento_m=2.5,
                largura_m=1.25,
                bitola_m=0.015,
                cubagem_m3=safe_cubagem(2.5, 1.25, 0.015),
                ativo=AtivoEnum.sim.value,
            )
        )
        seeded.append(Produto.__tablename__)

    return seeded


def init_schema(engine: Engine) -> None:
    create_schema(engine)
    with uow(label="seeds") as db:
        seeded = seed_defaults(db)
    if seeded:
        logger.info("seeds aplicados: %s", ", ".join(seeded))
    logger.info("schema pronto")
