# licenca_premio/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, List, Optional, Sequence, Tuple

from .logging_config import log
from .date_normalizer import normalize_date
from .errors import ContractViolation, DataIssue

# (ano inicial, ano final) do período aquisitivo
PeriodKey = Tuple[int, int]


@dataclass(frozen=True)
class LicenseRecord:
    """Uma linha da planilha já separada por servidor.

    As datas ficam no formato em que vieram (date, texto, serial do Excel);
    quem precisa delas passa por normalize_date.
    """

    holder_id: str
    acquisitive_start: Any = None
    acquisitive_end: Any = None
    enjoyment_start: Any = None
    enjoyment_end: Any = None
    days_granted: int = 0
    reported_remaining: Optional[int] = None


@dataclass(frozen=True)
class EnjoymentInterval:
    start: date
    end: date  # inclusivo

    @property
    def duration_days(self) -> int:
        return (_dia(self.end) - _dia(self.start)).days + 1

    @classmethod
    def from_record(cls, record: LicenseRecord) -> Optional["EnjoymentInterval"]:
        inicio = normalize_date(record.enjoyment_start)
        if not inicio.is_valid:
            return None
        fim = normalize_date(record.enjoyment_end)
        if fim.is_valid:
            data_fim = fim.value
        else:
            # Sem TERMINO: o gozo ocupa os dias concedidos a partir do início
            data_fim = inicio.value + timedelta(days=max(record.days_granted, 1) - 1)
        if data_fim < inicio.value:
            log.debug(
                f"Gozo com término anterior ao início ignorado ({record.holder_id}): "
                f"{inicio.value} > {data_fim}"
            )
            return None
        return cls(inicio.value, data_fim)


@dataclass(frozen=True)
class TimelineBlock:
    label: str
    number: int
    start: date
    end: date
    days: int


@dataclass
class AcquisitivePeriod:
    start_year: int
    end_year: int
    quinquennia_count: int = 1
    days_entitled: int = 0
    days_used: int = 0
    last_reported_remaining: int = 0
    records: List[LicenseRecord] = field(default_factory=list)
    invalidated_records: List[LicenseRecord] = field(default_factory=list)
    synthetic: bool = False
    issues: List[DataIssue] = field(default_factory=list)

    @property
    def key(self) -> PeriodKey:
        return (self.start_year, self.end_year)

    @property
    def invalidated_count(self) -> int:
        return len(self.invalidated_records)

    @property
    def label(self) -> str:
        if self.start_year == self.end_year:
            return str(self.start_year)
        return f"{self.start_year} - {self.end_year}"


@dataclass
class BalanceSummary:
    total_entitled: int = 0
    total_used: int = 0
    available: int = 0
    periods_count: int = 0
    invalidated_count: int = 0
    unassigned_records: List[LicenseRecord] = field(default_factory=list)
    # Registros fora dos períodos (data 1899) com RESTANDO divergente
    unassigned_invalidated_records: List[LicenseRecord] = field(default_factory=list)
    issues: List[DataIssue] = field(default_factory=list)
    earliest_acquisitive_start: Optional[date] = None

    @property
    def has_data(self) -> bool:
        return self.periods_count > 0

    @property
    def unassigned_days(self) -> int:
        return sum(r.days_granted for r in self.unassigned_records)

    @property
    def divergence(self) -> int:
        """Diferença entre o saldo informado e ganhos - usados (apenas informativo)."""
        return self.available - (self.total_entitled - self.total_used)


def add_issue(issues: List[DataIssue], issue: DataIssue) -> None:
    if issue not in issues:
        issues.append(issue)


def ensure_records(records: Any) -> Sequence[LicenseRecord]:
    if not isinstance(records, (list, tuple)):
        raise ContractViolation(
            f"Esperada lista de LicenseRecord, recebido {type(records).__name__}"
        )
    for posicao, record in enumerate(records):
        if not isinstance(record, LicenseRecord):
            raise ContractViolation(
                f"Item {posicao} não é LicenseRecord: {type(record).__name__}"
            )
    return records


def require_date(valor: Any, campo: str) -> date:
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    raise ContractViolation(f"'{campo}' deve ser date/datetime, recebido {type(valor).__name__}")


def _dia(valor: Any) -> date:
    return valor.date() if isinstance(valor, datetime) else valor
