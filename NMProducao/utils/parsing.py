# utils/parsing.py
"""
Conversões tolerantes para parâmetros de query e de rota.

Valores inválidos não geram erro aqui: quem chama decide o padrão.
"""
from datetime import date
from typing import Any, Iterable, Mapping, Optional


def parse_int_or(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def parse_date_or(value: Any) -> Optional[date]:
    """Aceita YYYY-MM-DD (ou ISO datetime, usando só a data); o resto vira None."""
    if value is None:
        return None
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def clamp_page(page: Any, page_size: Any, max_page_size: int, default_page_size: int = 50) -> tuple[int, int, int]:
    """Retorna (page, page_size, offset) já dentro dos limites."""
    p = max(1, parse_int_or(page, 1))
    size = min(max_page_size, max(1, parse_int_or(page_size, default_page_size)))
    return p, size, (p - 1) * size


def parse_id(value: Any) -> Optional[int]:
    """ID de rota: inteiro positivo ou None."""
    n = parse_int_or(value, 0)
    return n if n > 0 else None


def missing_fields(data: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    """Campos obrigatórios ausentes, nulos ou com texto vazio."""
    missing = []
    for name in required:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing
