# licenca_premio/balance.py
"""
Balanço de licença prêmio de um servidor.

Fluxo: registros -> períodos aquisitivos (agrupamento por par de anos) ->
direito por quinquênios + uso/último RESTANDO por período -> checagem do
RESTANDO -> resumo do servidor.

A checagem do RESTANDO percorre uma vez só todos os lançamentos do servidor
em ordem de gozo (inclusive os de data aquisitiva 1899 com gozo datado),
partindo do direito do primeiro período. Os invalidados voltam depois para
o período de cada registro.

O disponível do servidor é o último RESTANDO do período mais recente, nunca
"ganhos - usados": o saldo é um contador mantido fora do sistema.
"""

from typing import List, Optional, Sequence, Tuple

from .logging_config import log
from .anomaly_detector import AnomalyReport, detect_anomalies
from .config import Settings, settings
from .date_normalizer import normalize_date
from .errors import DataIssue
from .models import AcquisitivePeriod, BalanceSummary, LicenseRecord, add_issue, ensure_records
from .period_grouper import PeriodGrouping, group_periods
from .quinquennium import calculate_quinquennia
from .usage_aggregator import aggregate_usage, chronological


def _checar_restando(
    records: Sequence[LicenseRecord], grouping: PeriodGrouping, saldo_inicial: int
) -> AnomalyReport:
    no_fluxo = {id(r) for membros in grouping.groups.values() for r in membros}
    no_fluxo.update(id(r) for r in grouping.usage_only)
    # Filtra sobre a lista original para manter a ordem de ingestão nos empates
    fluxo = chronological([r for r in records if id(r) in no_fluxo])
    return detect_anomalies(fluxo, saldo_inicial)


def _montar_periodos(
    records: Sequence[LicenseRecord], config: Settings
) -> Tuple[List[AcquisitivePeriod], PeriodGrouping, AnomalyReport]:
    ensure_records(records)

    titulares = {r.holder_id for r in records}
    if len(titulares) > 1:
        log.warning(f"Registros de mais de um servidor no mesmo cálculo: {sorted(titulares)}")

    grouping = group_periods(records, config.ANOS_POR_QUINQUENIO)

    periodos = []
    for (ano_inicio, ano_fim) in sorted(grouping.groups):
        membros = chronological(grouping.groups[(ano_inicio, ano_fim)])
        quinquenios = calculate_quinquennia(ano_inicio, ano_fim, config.ANOS_POR_QUINQUENIO)
        direito = quinquenios * config.DIAS_POR_QUINQUENIO
        uso = aggregate_usage(membros, direito)

        periodos.append(
            AcquisitivePeriod(
                start_year=ano_inicio,
                end_year=ano_fim,
                quinquennia_count=quinquenios,
                days_entitled=direito,
                days_used=uso.days_used,
                last_reported_remaining=uso.last_reported_remaining,
                records=membros,
                synthetic=grouping.synthetic,
                issues=list(grouping.issues.get((ano_inicio, ano_fim), [])),
            )
        )

    # Sem período o saldo de partida é um quinquênio
    saldo_inicial = periodos[0].days_entitled if periodos else config.DIAS_POR_QUINQUENIO
    relatorio = _checar_restando(records, grouping, saldo_inicial)

    invalidados = {id(r) for r in relatorio.invalidated_records}
    for periodo in periodos:
        periodo.invalidated_records = [r for r in periodo.records if id(r) in invalidados]
        if periodo.invalidated_records:
            add_issue(periodo.issues, DataIssue.BALANCE_MISMATCH)

    return periodos, grouping, relatorio


def compute_periods(
    records: Sequence[LicenseRecord], config: Optional[Settings] = None
) -> List[AcquisitivePeriod]:
    """Períodos aquisitivos do servidor em ordem cronológica, cada um com a
    lista de registros invalidados para os avisos da interface."""
    periodos, _, _ = _montar_periodos(records, settings if config is None else config)
    return periodos


def compute_balance(
    records: Sequence[LicenseRecord], config: Optional[Settings] = None
) -> BalanceSummary:
    periodos, grouping, relatorio = _montar_periodos(
        records, settings if config is None else config
    )

    fora = {id(r) for r in grouping.usage_only}
    resumo = BalanceSummary(
        unassigned_records=list(grouping.unassigned),
        unassigned_invalidated_records=[
            r for r in relatorio.invalidated_records if id(r) in fora
        ],
        invalidated_count=relatorio.invalidated_count,
    )
    for issue in grouping.unassigned_issues:
        add_issue(resumo.issues, issue)
    if resumo.unassigned_invalidated_records:
        add_issue(resumo.issues, DataIssue.BALANCE_MISMATCH)

    if not periodos:
        if records:
            log.warning(
                f"Nenhum período aquisitivo utilizável ({records[0].holder_id}, "
                f"{len(records)} registro(s)); balanço zerado"
            )
        return resumo

    resumo.total_entitled = sum(p.days_entitled for p in periodos)
    resumo.total_used = sum(p.days_used for p in periodos)
    resumo.available = periodos[-1].last_reported_remaining
    resumo.periods_count = len(periodos)
    for periodo in periodos:
        for issue in periodo.issues:
            add_issue(resumo.issues, issue)

    # Início aquisitivo mais antigo (referência de admissão)
    if not grouping.synthetic:
        inicios = [
            normalize_date(r.acquisitive_start).value for p in periodos for r in p.records
        ]
        inicios = [d for d in inicios if d is not None]
        if inicios:
            resumo.earliest_acquisitive_start = min(inicios)

    log.debug(
        f"Balanço {records[0].holder_id}: ganhos={resumo.total_entitled} "
        f"usados={resumo.total_used} disponível={resumo.available} "
        f"períodos={resumo.periods_count} invalidados={resumo.invalidated_count}"
    )
    return resumo
