# services/common.py
from __future__ import annotations

from datetime import date
from typing import Any, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from models.produto import Produto
from models.setor import Setor
from models.turno import Turno
from schemas.common import FATO_CAMPOS_OBRIGATORIOS, FatoIn
from utils.parsing import missing_fields


# -------------------------------------------------------------------
# Paginação
# -------------------------------------------------------------------
def paginate(query: Query, count_query: Query, offset: int, limit: int) -> Tuple[list, int]:
    """
    Executa a página e a contagem com os mesmos filtros.
    A ordenação precisa ser total (desempate por PK) para páginas estáveis.
    """
    rows = query.offset(offset).limit(limit).all()
    total = count_query.scalar() or 0
    return rows, int(total)


# -------------------------------------------------------------------
# Filtros
# -------------------------------------------------------------------
def apply_date_range(query: Query, column: Any, de: Optional[date], ate: Optional[date]) -> Query:
    """Intervalo inclusivo; limites ausentes não filtram."""
    if de is not None:
        query = query.filter(column >= de)
    if ate is not None:
        query = query.filter(column <= ate)
    return query


# -------------------------------------------------------------------
# Serialização
# -------------------------------------------------------------------
def model_to_dict(obj: Any) -> dict:
    """Colunas da tabela do objeto ORM como dict (nomes das colunas)."""
    return {c.key: getattr(obj, c.key) for c in obj.__table__.columns}


# -------------------------------------------------------------------
# Fatos (produção / descarte)
# -------------------------------------------------------------------
def ensure_fato_required(payload: FatoIn) -> None:
    """400 listando os campos do lançamento que faltam (ausentes, nulos ou vazios)."""
    faltando = missing_fields(payload.model_dump(by_alias=True), FATO_CAMPOS_OBRIGATORIOS)
    if faltando:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Campos obrigatórios: {', '.join(faltando)}",
        )


def list_fatos(
    db: Session,
    model: Any,
    pk: Any,
    offset: int,
    limit: int,
    de: Optional[date] = None,
    ate: Optional[date] = None,
) -> Tuple[list[dict], int]:
    """
    Lista um fato com os nomes das dimensões (LEFT JOIN: a linha aparece
    mesmo se a dimensão referenciada sumir), do mais recente para o mais
    antigo, desempatando pelo ID.
    """
    query = (
        db.query(
            model,
            Turno.turnonome,
            Setor.setornome,
            Produto.descricao.label("produtodescricao"),
            Produto.codigo,
        )
        .outerjoin(Turno, Turno.turnoid == model.turnoid)
        .outerjoin(Setor, Setor.setorid == model.setorid)
        .outerjoin(Produto, Produto.produtoid == model.produtoid)
    )
    count_query = db.query(func.count(pk))

    query = apply_date_range(query, model.data, de, ate)
    count_query = apply_date_range(count_query, model.data, de, ate)

    rows, total = paginate(query.order_by(model.data.desc(), pk.desc()), count_query, offset, limit)
    return [
        {
            **model_to_dict(fato),
            "turnonome": turnonome,
            "setornome": setornome,
            "produtodescricao": produtodescricao,
            "codigo": codigo,
        }
        for fato, turnonome, setornome, produtodescricao, codigo in rows
    ], total
