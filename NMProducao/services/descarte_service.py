# services/descarte_service.py
from datetime import date
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from models.descarte import Descarte
from schemas.descarte import DescarteIn
from services.common import ensure_fato_required, list_fatos


def list_descarte(
    db: Session,
    offset: int,
    limit: int,
    de: Optional[date] = None,
    ate: Optional[date] = None,
) -> Tuple[list[dict], int]:
    return list_fatos(db, Descarte, Descarte.descarteid, offset, limit, de, ate)


def create_descarte(db: Session, payload: DescarteIn) -> Descarte:
    ensure_fato_required(payload)
    descarte = Descarte(
        data=payload.data,
        turnoid=payload.turnoid,
        setorid=payload.setorid,
        produtoid=payload.produtoid,
        tipo_descarte=payload.tipo_descarte,
        quantidade_chapas=payload.quantidade_chapas,
        obs=payload.obs,
    )
    db.add(descarte)
    db.commit()
    db.refresh(descarte)
    return descarte


def delete_descarte(db: Session, descarte_id: int) -> int:
    count = db.query(Descarte).filter(Descarte.descarteid == descarte_id).delete(synchronize_session=False)
    db.commit()
    return count
