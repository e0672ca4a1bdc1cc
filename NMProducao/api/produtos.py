# api/produtos.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from schemas.common import CreatedOut, DeletedOut, Msg, Paginated
from schemas.produto import ProdutoIn, ProdutoOut
from services.produto_service import (
    PRODUTOS_MAX_PAGE_SIZE,
    create_produto,
    delete_produto,
    get_produto,
    list_produtos,
    update_produto,
)
from utils.db import get_db
from utils.dependencies import Page, PageParams, path_id

router = APIRouter(prefix="/produtos", tags=["produtos"])


@router.get("", response_model=Paginated[ProdutoOut])
def get_produtos(
        page: Page = Depends(PageParams(PRODUTOS_MAX_PAGE_SIZE)),
        search: Optional[str] = Query(None, description="Trecho do código ou da descrição"),
        db: Session = Depends(get_db),
):
    produtos, total = list_produtos(db, page.offset, page.page_size, search)
    rows = [ProdutoOut.model_validate(p) for p in produtos]
    return {"page": page.page, "pageSize": page.page_size, "total": total, "rows": rows}


@router.get("/{id}", response_model=ProdutoOut)
def get_produto_by_id(produto_id: int = Depends(path_id), db: Session = Depends(get_db)):
    return get_produto(db, produto_id)


@router.post(
    "",
    response_model=CreatedOut,
    status_code=status.HTTP_201_CREATED,
    summary="Criar produto",
    description="A cubagem é calculada no servidor (comprimento × largura × bitola), "
                "salvo se Cubagem_m3 for informada; valor inválido ou negativo vira 0.",
)
def post_produto(payload: ProdutoIn, db: Session = Depends(get_db)):
    produto = create_produto(db, payload)
    return {"message": "Produto criado", "id": produto.produtoid}


@router.put("/{id}", response_model=Msg)
def put_produto(payload: ProdutoIn, produto_id: int = Depends(path_id), db: Session = Depends(get_db)):
    update_produto(db, produto_id, payload)
    return {"message": "Produto atualizado"}


@router.delete("/{id}", response_model=DeletedOut)
def remove_produto(produto_id: int = Depends(path_id), db: Session = Depends(get_db)):
    return {"message": "Produto excluído", "rowCount": delete_produto(db, produto_id)}
