# licenca_premio/timeline.py
"""
Cronograma de gozo em blocos de até 30 dias para exibição.

Rótulos: o primeiro bloco é sempre "Início"; havendo mais de um, o último é
"Fim" e os do meio são "Bloco N" (N = número sequencial, começando em 1).
Um intervalo de bloco único continua rotulado como "Início".
"""

import math
from datetime import date, timedelta
from typing import List, Optional

from .logging_config import log
from .config import settings
from .errors import ContractViolation
from .models import EnjoymentInterval, TimelineBlock, require_date

LABEL_INICIO = "Início"
LABEL_FIM = "Fim"


def _label(numero: int, total_blocos: int) -> str:
    if numero == 1:
        return LABEL_INICIO
    if numero == total_blocos:
        return LABEL_FIM
    return f"Bloco {numero}"


def segment_timeline(
    start: date, end: date, dias_por_bloco: Optional[int] = None
) -> List[TimelineBlock]:
    inicio = require_date(start, "start")
    fim = require_date(end, "end")
    tamanho = settings.DIAS_POR_BLOCO if dias_por_bloco is None else dias_por_bloco
    if tamanho <= 0:
        raise ContractViolation(f"Tamanho de bloco deve ser positivo, recebido {tamanho}")

    total_dias = (fim - inicio).days + 1
    if total_dias <= 0:
        log.warning(f"Intervalo de gozo invertido ({inicio} > {fim}); nenhum bloco gerado")
        return []

    total_blocos = math.ceil(total_dias / tamanho)
    blocos = []
    cursor = inicio
    restante = total_dias
    numero = 1
    while restante > 0:
        dias = min(tamanho, restante)
        bloco_fim = cursor + timedelta(days=dias - 1)
        blocos.append(TimelineBlock(_label(numero, total_blocos), numero, cursor, bloco_fim, dias))
        cursor = bloco_fim + timedelta(days=1)
        restante -= dias
        numero += 1

    return blocos


def segment_interval(
    interval: EnjoymentInterval, dias_por_bloco: Optional[int] = None
) -> List[TimelineBlock]:
    return segment_timeline(interval.start, interval.end, dias_por_bloco)
