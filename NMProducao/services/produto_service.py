# services/produto_service.py
import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from models.produto import Produto
from schemas.produto import PRODUTO_CAMPOS_OBRIGATORIOS, ProdutoIn
from services.calculation_service import safe_cubagem
from services.common import paginate
from utils.parsing import missing_fields

logger = logging.getLogger(__name__)

PRODUTOS_MAX_PAGE_SIZE = 100


def _ensure_required(payload: ProdutoIn) -> None:
    faltando = missing_fields(payload.model_dump(by_alias=True), PRODUTO_CAMPOS_OBRIGATORIOS)
    if faltando:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Campos obrigatórios: {', '.join(faltando)}",
        )


def _values(payload: ProdutoIn) -> dict:
    """Colunas a gravar; a cubagem sempre é recalculada/saneada no servidor."""
    return {
        "codigo": payload.codigo,
        "descricao": payload.descricao,
        "familiaid": payload.familiaid,
        "comprimento_m": payload.comprimento_m,
        "largura_m": payload.largura_m,
        "bitola_m": payload.bitola_m,
        "cubagem_m3": safe_cubagem(payload.comprimento_m, payload.largura_m, payload.bitola_m, payload.cubagem_m3),
        "ativo": payload.ativo,
    }


def list_produtos(
    db: Session,
    offset: int,
    limit: int,
    search: Optional[str] = None,
) -> Tuple[List[Produto], int]:
    """
    Produtos do mais novo para o mais antigo, com busca por
    código/descrição (sem diferenciar maiúsculas).
    """
    query = db.query(Produto)
    count_query = db.query(func.count(Produto.produtoid))

    termo = (search or "").strip()
    if termo:
        like = f"%{termo}%"
        cond = or_(Produto.codigo.ilike(like), Produto.descricao.ilike(like))
        query = query.filter(cond)
        count_query = count_query.filter(cond)

    return paginate(query.order_by(Produto.produtoid.desc()), count_query, offset, limit)


def get_produto(db: Session, produto_id: int) -> Produto:
    produto = db.get(Produto, produto_id)
    if not produto:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Produto não encontrado")
    return produto


def create_produto(db: Session, payload: ProdutoIn) -> Produto:
    _ensure_required(payload)
    produto = Produto(**_values(payload))
    db.add(produto)
    db.commit()
    db.refresh(produto)
    logger.info("produto criado id=%s codigo=%s cubagem=%s", produto.produtoid, produto.codigo, produto.cubagem_m3)
    return produto


def update_produto(db: Session, produto_id: int, payload: ProdutoIn) -> int:
    """Atualiza todas as colunas; retorna quantas linhas mudaram (0 se o ID não existe)."""
    _ensure_required(payload)
    count = (
        db.query(Produto)
        .filter(Produto.produtoid == produto_id)
        .update(_values(payload), synchronize_session=False)
    )
    db.commit()
    return count


def delete_produto(db: Session, produto_id: int) -> int:
    count = db.query(Produto).filter(Produto.produtoid == produto_id).delete(synchronize_session=False)
    db.commit()
    return count
