# api/descarte.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from schemas.common import CreatedOut, DeletedOut, Paginated
from schemas.descarte import DescarteIn, DescarteOut
from services.descarte_service import create_descarte, delete_descarte, list_descarte
from services.producao_service import FATOS_MAX_PAGE_SIZE
from utils.db import get_db
from utils.dependencies import DateRangeParams, Page, PageParams, date_range, path_id

router = APIRouter(prefix="/descarte", tags=["descarte"])


@router.get("", response_model=Paginated[DescarteOut])
def get_descarte(
        page: Page = Depends(PageParams(FATOS_MAX_PAGE_SIZE)),
        periodo: DateRangeParams = Depends(date_range),
        db: Session = Depends(get_db),
):
    rows, total = list_descarte(db, page.offset, page.page_size, periodo.de, periodo.ate)
    return {"page": page.page, "pageSize": page.page_size, "total": total, "rows": rows}


@router.post("", response_model=CreatedOut, status_code=status.HTTP_201_CREATED)
def post_descarte(payload: DescarteIn, db: Session = Depends(get_db)):
    descarte = create_descarte(db, payload)
    return {"message": "Descarte registrado", "id": descarte.descarteid}


@router.delete("/{id}", response_model=DeletedOut)
def remove_descarte(descarte_id: int = Depends(path_id), db: Session = Depends(get_db)):
    return {"message": "Descarte excluído", "rowCount": delete_descarte(db, descarte_id)}
