# licenca_premio/quinquennium.py
"""
Cálculo de quinquênios: 90 dias de licença por janela de 5 anos de serviço,
completa ou parcial. Um período com extensão nominal maior que 5 anos
(limites aquisitivos irregulares) escala linearmente em vez de parar em 90.
"""

import math
from typing import Optional

from .config import settings
from .errors import ContractViolation


def calculate_quinquennia(
    start_year: int, end_year: int, anos_por_quinquenio: Optional[int] = None
) -> int:
    anos = settings.ANOS_POR_QUINQUENIO if anos_por_quinquenio is None else anos_por_quinquenio
    if anos <= 0:
        raise ContractViolation(f"Anos por quinquênio deve ser positivo, recebido {anos}")
    return max(1, math.ceil((end_year - start_year) / anos))


def days_entitled_for(
    start_year: int,
    end_year: int,
    dias_por_quinquenio: Optional[int] = None,
    anos_por_quinquenio: Optional[int] = None,
) -> int:
    dias = settings.DIAS_POR_QUINQUENIO if dias_por_quinquenio is None else dias_por_quinquenio
    return dias * calculate_quinquennia(start_year, end_year, anos_por_quinquenio)
