# licenca_premio/period_grouper.py
"""
Agrupamento dos registros de um servidor em períodos aquisitivos.

A chave do período é apenas o par (ano inicial, ano final): lançamentos
repetidos na planilha com dia/mês ligeiramente diferentes (04/04/2013 e
06/04/2013, por exemplo) caem no mesmo período.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .logging_config import log
from .config import settings
from .date_normalizer import normalize_date
from .errors import DataIssue
from .models import LicenseRecord, PeriodKey, add_issue, ensure_records


@dataclass
class PeriodGrouping:
    # Listas na ordem original de ingestão
    groups: Dict[PeriodKey, List[LicenseRecord]] = field(default_factory=dict)
    issues: Dict[PeriodKey, List[DataIssue]] = field(default_factory=dict)
    unassigned: List[LicenseRecord] = field(default_factory=list)
    unassigned_issues: List[DataIssue] = field(default_factory=list)
    # Registros 1899 com gozo datado: fora dos períodos, mas ainda passam pela
    # checagem do RESTANDO
    usage_only: List[LicenseRecord] = field(default_factory=list)
    synthetic: bool = False

    def add(self, key: PeriodKey, record: LicenseRecord, issue: Optional[DataIssue] = None):
        self.groups.setdefault(key, []).append(record)
        issues = self.issues.setdefault(key, [])
        if issue is not None:
            add_issue(issues, issue)

    def discard(self, record: LicenseRecord, issue: DataIssue):
        self.unassigned.append(record)
        add_issue(self.unassigned_issues, issue)


def group_periods(
    records: Sequence[LicenseRecord], anos_por_quinquenio: Optional[int] = None
) -> PeriodGrouping:
    ensure_records(records)
    anos = settings.ANOS_POR_QUINQUENIO if anos_por_quinquenio is None else anos_por_quinquenio

    normalizados = [
        (record, normalize_date(record.acquisitive_start), normalize_date(record.acquisitive_end))
        for record in records
    ]

    # Sem nenhuma data aquisitiva utilizável no servidor inteiro: usa o ano do gozo
    sem_aquisitivo = all(inicio.is_invalid and fim.is_invalid for _, inicio, fim in normalizados)

    grouping = PeriodGrouping(synthetic=sem_aquisitivo and bool(records))

    for record, inicio, fim in normalizados:
        if inicio.is_sentinel or fim.is_sentinel:
            log.debug(f"Registro com data aquisitiva 1899 fora do agrupamento ({record.holder_id})")
            grouping.discard(record, DataIssue.SENTINEL_DATE)
            if normalize_date(record.enjoyment_start).is_valid:
                grouping.usage_only.append(record)
            continue

        if sem_aquisitivo:
            gozo = normalize_date(record.enjoyment_start)
            if gozo.is_valid:
                grouping.add(
                    (gozo.year, gozo.year), record, DataIssue.MISSING_ACQUISITIVE_DATES
                )
            else:
                grouping.discard(record, DataIssue.MALFORMED_DATE)
            continue

        if not inicio.is_valid:
            log.warning(
                f"Início aquisitivo ilegível ({record.holder_id}): '{record.acquisitive_start}'"
            )
            grouping.discard(record, DataIssue.MALFORMED_DATE)
            continue

        if fim.is_valid:
            grouping.add((inicio.year, fim.year), record)
        else:
            # Fim ausente/ilegível: assume a janela nominal de um quinquênio
            log.warning(
                f"Fim aquisitivo ilegível ({record.holder_id}): '{record.acquisitive_end}', "
                f"assumindo {inicio.year + anos}"
            )
            grouping.add((inicio.year, inicio.year + anos), record, DataIssue.MALFORMED_DATE)

    if grouping.synthetic:
        log.warning(
            f"Servidor sem datas aquisitivas; {len(grouping.groups)} período(s) sintético(s) pelo ano do gozo"
        )
    return grouping
