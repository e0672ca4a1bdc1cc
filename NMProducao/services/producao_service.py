# services/producao_service.py
import logging
from datetime import date
from typing import Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from models.producao import Producao
from models.produto import Produto
from schemas.producao import ProducaoIn
from services.calculation_service import cubagem_lancamento, safe_cubagem
from services.common import ensure_fato_required, list_fatos

logger = logging.getLogger(__name__)

FATOS_MAX_PAGE_SIZE = 200


def list_producao(
    db: Session,
    offset: int,
    limit: int,
    de: Optional[date] = None,
    ate: Optional[date] = None,
) -> Tuple[list[dict], int]:
    return list_fatos(db, Producao, Producao.producaoid, offset, limit, de, ate)


def create_producao(db: Session, payload: ProducaoIn) -> Producao:
    """
    Registra produção copiando as dimensões atuais do produto para a linha
    do fato. O produto precisa existir.
    """
    ensure_fato_required(payload)

    produto = db.get(Produto, payload.produtoid)
    if not produto:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Produto inválido")

    chapas = payload.quantidade_chapas or 0
    unitaria = safe_cubagem(produto.comprimento_m, produto.largura_m, produto.bitola_m)

    producao = Producao(
        data=payload.data,
        turnoid=payload.turnoid,
        setorid=payload.setorid,
        produtoid=produto.produtoid,
        quantidade_chapas=chapas,
        comprimento_m=produto.comprimento_m,
        largura_m=produto.largura_m,
        bitola_m=produto.bitola_m,
        cubagem_m3=cubagem_lancamento(unitaria, chapas),
    )
    db.add(producao)
    db.commit()
    db.refresh(producao)
    logger.info(
        "produção registrada id=%s produto=%s chapas=%s m3=%s",
        producao.producaoid, produto.produtoid, chapas, producao.cubagem_m3,
    )
    return producao


def delete_producao(db: Session, producao_id: int) -> int:
    count = db.query(Producao).filter(Producao.producaoid == producao_id).delete(synchronize_session=False)
    db.commit()
    return count
