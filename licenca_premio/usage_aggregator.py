# licenca_premio/usage_aggregator.py

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from .date_normalizer import normalize_date
from .models import LicenseRecord


@dataclass(frozen=True)
class UsageTotals:
    days_used: int
    last_reported_remaining: int
    has_reported_value: bool


def chronological(records: Sequence[LicenseRecord]) -> List[LicenseRecord]:
    """Ordena por início do gozo; sem data legível vai para o começo.
    sorted() é estável, então empates mantêm a ordem de ingestão."""

    def chave(record: LicenseRecord):
        inicio = normalize_date(record.enjoyment_start)
        if inicio.is_valid:
            return (1, inicio.value)
        return (0, date.min)

    return sorted(records, key=chave)


def aggregate_usage(records: Sequence[LicenseRecord], days_entitled: int) -> UsageTotals:
    """Soma o GOZO do período e pega o último RESTANDO informado.

    Se nenhum registro informa RESTANDO, nada foi consumido do ponto de vista
    da planilha e o saldo herdado é o próprio direito do período.
    """
    days_used = sum(r.days_granted for r in records)

    ultimo: Optional[int] = None
    for record in chronological(records):
        if record.reported_remaining is not None:
            ultimo = record.reported_remaining

    if ultimo is None:
        return UsageTotals(days_used, days_entitled, False)
    return UsageTotals(days_used, ultimo, True)
