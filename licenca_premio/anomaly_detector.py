# licenca_premio/anomaly_detector.py
"""
Detecção de RESTANDO inconsistente.

O saldo restante da planilha é um contador digitado à mão que só deveria
diminuir pelo GOZO de cada lançamento. Quando alguém lança um gozo sem
atualizar o saldo (ou atualiza errado), o RESTANDO informado diverge do
esperado e o registro é marcado como invalidado.

Pré-condição: os registros chegam ordenados pelo início do gozo. A função não
reordena; ordem errada produz marcações erradas, não exceção.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .logging_config import log
from .models import LicenseRecord, ensure_records


@dataclass(frozen=True)
class RecordCheck:
    record: LicenseRecord
    expected: int
    reported: Optional[int]
    invalidated: bool


@dataclass
class AnomalyReport:
    checks: List[RecordCheck] = field(default_factory=list)
    final_remaining: int = 0

    @property
    def flags(self) -> List[bool]:
        return [check.invalidated for check in self.checks]

    @property
    def invalidated_records(self) -> List[LicenseRecord]:
        return [check.record for check in self.checks if check.invalidated]

    @property
    def invalidated_count(self) -> int:
        return sum(1 for check in self.checks if check.invalidated)


def detect_anomalies(records: Sequence[LicenseRecord], initial_remaining: int) -> AnomalyReport:
    ensure_records(records)
    esperado = initial_remaining
    report = AnomalyReport()

    for record in records:
        candidato = esperado - record.days_granted
        informado = record.reported_remaining

        if informado is not None and informado != candidato:
            # A leitura divergente não vira base; segue com o valor esperado
            log.warning(
                f"RESTANDO divergente ({record.holder_id}): esperado {candidato}, "
                f"informado {informado} (gozo {record.days_granted})"
            )
            report.checks.append(RecordCheck(record, candidato, informado, True))
            esperado = candidato
            continue

        report.checks.append(RecordCheck(record, candidato, informado, False))
        esperado = informado if informado is not None else candidato

    report.final_remaining = esperado
    return report
