from datetime import date
from typing import NamedTuple, Optional

from fastapi import HTTPException, Path, Query, status

from utils.parsing import clamp_page, parse_date_or, parse_id


class Page(NamedTuple):
    page: int
    page_size: int
    offset: int


class PageParams:
    """
    Dependência de paginação: page >= 1 (padrão 1) e pageSize entre 1 e
    `max_page_size` (padrão 50). Valores inválidos caem no padrão.
    """

    def __init__(self, max_page_size: int, default_page_size: int = 50):
        self.max_page_size = max_page_size
        self.default_page_size = default_page_size

    def __call__(
        self,
        page: Optional[str] = Query(None),
        pageSize: Optional[str] = Query(None),
    ) -> Page:
        return Page(*clamp_page(page, pageSize, self.max_page_size, self.default_page_size))


class DateRangeParams(NamedTuple):
    de: Optional[date]
    ate: Optional[date]


def date_range(
    de: Optional[str] = Query(None),
    ate: Optional[str] = Query(None),
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = Query(None),
) -> DateRangeParams:
    """Intervalo inclusivo; data malformada é ignorada (o filtro some)."""
    return DateRangeParams(
        de=parse_date_or(de if de is not None else from_),
        ate=parse_date_or(ate if ate is not None else to),
    )


def path_id(id: str = Path(...)) -> int:
    """ID de rota numérico e maior que zero; rejeitado antes de tocar o banco."""
    parsed = parse_id(id)
    if parsed is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ID inválido")
    return parsed
