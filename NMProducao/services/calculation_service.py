"""
Cálculos de cubagem e eficiência usados pelos cadastros e pelo dashboard.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional


# ==================== CUBAGEM ====================

def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def safe_cubagem(
    comprimento_m: Any,
    largura_m: Any,
    bitola_m: Any,
    cubagem_informada: Optional[Any] = None,
) -> float:
    """
    Volume unitário (m³) de uma chapa.

    Fórmula:
    cubagem = comprimento × largura × bitola

    Se `cubagem_informada` vier preenchida ela prevalece sobre o cálculo.
    Valor não finito ou negativo vira 0: nunca rejeita, só saneia.
    """
    if cubagem_informada is not None:
        n = _to_float(cubagem_informada)
    else:
        n = _to_float(comprimento_m) * _to_float(largura_m) * _to_float(bitola_m)
    return n if math.isfinite(n) and n >= 0 else 0.0


def cubagem_lancamento(cubagem_unitaria: float, quantidade_chapas: int) -> float:
    """Volume total de um lançamento de produção."""
    return cubagem_unitaria * quantidade_chapas


# ==================== EFICIÊNCIA ====================

def calculate_eficiencia(total_chapas_produzidas: Any, total_chapas_descartadas: Any) -> float:
    """
    Eficiência (%) = (1 - descarte / produção) × 100, com 2 casas.

    Sem produção registrada retorna 0 (não é erro).
    """
    produzidas = Decimal(str(total_chapas_produzidas or 0))
    if produzidas <= 0:
        return 0.0
    descartadas = Decimal(str(total_chapas_descartadas or 0))
    eficiencia = (Decimal("1") - descartadas / produzidas) * Decimal("100")
    return float(eficiencia.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
