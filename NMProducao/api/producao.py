# api/producao.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from schemas.common import CreatedOut, DeletedOut, Paginated
from schemas.producao import ProducaoIn, ProducaoOut
from services.producao_service import FATOS_MAX_PAGE_SIZE, create_producao, delete_producao, list_producao
from utils.db import get_db
from utils.dependencies import DateRangeParams, Page, PageParams, date_range, path_id

router = APIRouter(prefix="/producao", tags=["producao"])


@router.get("", response_model=Paginated[ProducaoOut])
def get_producao(
        page: Page = Depends(PageParams(FATOS_MAX_PAGE_SIZE)),
        periodo: DateRangeParams = Depends(date_range),
        db: Session = Depends(get_db),
):
    rows, total = list_producao(db, page.offset, page.page_size, periodo.de, periodo.ate)
    return {"page": page.page, "pageSize": page.page_size, "total": total, "rows": rows}


@router.post(
    "",
    response_model=CreatedOut,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar produção",
    description="Copia as dimensões atuais do produto para o lançamento; o produto precisa existir.",
)
def post_producao(payload: ProducaoIn, db: Session = Depends(get_db)):
    producao = create_producao(db, payload)
    return {"message": "Produção registrada", "id": producao.producaoid}


@router.delete("/{id}", response_model=DeletedOut)
def remove_producao(producao_id: int = Depends(path_id), db: Session = Depends(get_db)):
    return {"message": "Produção excluída", "rowCount": delete_producao(db, producao_id)}
