# licenca_premio/overlap.py
"""
Consultas de intervalos de gozo contra janelas de datas (filtros por período).
"""

from collections import abc
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Sequence

from .models import EnjoymentInterval, LicenseRecord, ensure_records, require_date
from .errors import ContractViolation

_FIM_DO_DIA = time(23, 59, 59)


def _como_datetime(valor) -> datetime:
    if isinstance(valor, datetime):
        return valor
    return datetime.combine(valor, time.min)


def _intervalos(intervals: Iterable[EnjoymentInterval]) -> List[EnjoymentInterval]:
    if isinstance(intervals, (str, bytes)) or not isinstance(intervals, abc.Iterable):
        raise ContractViolation(
            f"Esperada lista de EnjoymentInterval, recebido {type(intervals).__name__}"
        )
    lista = list(intervals)
    for posicao, interval in enumerate(lista):
        if not isinstance(interval, EnjoymentInterval):
            raise ContractViolation(
                f"Item {posicao} não é EnjoymentInterval: {type(interval).__name__}"
            )
    return lista


def holder_intervals(records: Sequence[LicenseRecord]) -> List[EnjoymentInterval]:
    """Intervalos de gozo (principal e repetidos) de um servidor, ignorando
    registros sem início de gozo legível."""
    ensure_records(records)
    intervalos = []
    for record in records:
        interval = EnjoymentInterval.from_record(record)
        if interval is not None:
            intervalos.append(interval)
    return intervalos


def intervals_overlap(
    query_start: date, query_end: date, intervals: Iterable[EnjoymentInterval]
) -> bool:
    """True se algum intervalo encosta na janela [início 00:00:00, fim 23:59:59]."""
    inicio = datetime.combine(require_date(query_start, "query_start"), time.min)
    fim = datetime.combine(require_date(query_end, "query_end"), _FIM_DO_DIA)

    for interval in _intervalos(intervals):
        if _como_datetime(interval.end) >= inicio and _como_datetime(interval.start) <= fim:
            return True
    return False


def interval_on(day: date, intervals: Iterable[EnjoymentInterval]) -> Optional[EnjoymentInterval]:
    """Intervalo de gozo que contém o dia informado, se houver."""
    dia = require_date(day, "day")
    for interval in _intervalos(intervals):
        if require_date(interval.start, "start") <= dia <= require_date(interval.end, "end"):
            return interval
    return None


def scheduled_days_until(
    intervals: Iterable[EnjoymentInterval], limit: date, today: Optional[date] = None
) -> int:
    """Dias de gozo ainda por acontecer entre hoje e a data limite (inclusive).
    Usado para saber quanto da licença agendada cabe antes da aposentadoria."""
    limite = require_date(limit, "limit")
    hoje = require_date(today, "today") if today is not None else date.today()

    total = 0
    for interval in _intervalos(intervals):
        inicio = max(require_date(interval.start, "start"), hoje)
        fim = min(require_date(interval.end, "end"), limite)
        if fim >= inicio:
            total += (fim - inicio).days + 1
    return total
