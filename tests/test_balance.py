# tests/test_balance.py

import copy
import math
from datetime import date

import pytest

from licenca_premio.balance import compute_balance, compute_periods
from licenca_premio.config import Settings
from licenca_premio.errors import ContractViolation, DataIssue
from licenca_premio.models import LicenseRecord


def criar_registro(**dados) -> LicenseRecord:
    padrao = {
        "holder_id": "ACACIA MARIA",
        "acquisitive_start": "04/04/2013",
        "acquisitive_end": "03/04/2018",
        "enjoyment_start": "01/02/2019",
        "enjoyment_end": "02/03/2019",
        "days_granted": 30,
        "reported_remaining": 60,
    }
    padrao.update(dados)
    return LicenseRecord(**padrao)


def servidor_dois_periodos():
    return [
        criar_registro(enjoyment_start="01/02/2019", days_granted=30, reported_remaining=60),
        # lançamento repetido com dia diferente no aquisitivo
        criar_registro(acquisitive_start="06/04/2013", enjoyment_start="01/08/2019", days_granted=30, reported_remaining=30),
        criar_registro(
            acquisitive_start="04/04/2018",
            acquisitive_end="03/04/2023",
            enjoyment_start="2024-01-10",
            days_granted=30,
            reported_remaining=60,
        ),
    ]


def test_balanco_de_dois_periodos():
    # Act
    resumo = compute_balance(servidor_dois_periodos())
    # Assert
    assert resumo.periods_count == 2
    assert resumo.total_entitled == 180
    assert resumo.total_used == 90
    assert resumo.available == 60  # RESTANDO do período mais recente
    # o saldo segue de um período para o outro: 90 -> 60 -> 30 -> 0, e o
    # terceiro lançamento informa 60
    assert resumo.invalidated_count == 1
    assert resumo.earliest_acquisitive_start == date(2013, 4, 4)
    assert resumo.divergence == 60 - (180 - 90)


def test_disponivel_nao_e_ganhos_menos_usados():
    registros = [criar_registro(days_granted=30, reported_remaining=75)]
    resumo = compute_balance(registros)
    assert resumo.available == 75
    assert resumo.total_entitled - resumo.total_used == 60
    assert resumo.invalidated_count == 1


def test_periodos_em_ordem_cronologica_com_invalidados():
    registros = servidor_dois_periodos()
    registros.append(
        criar_registro(
            acquisitive_start="04/04/2018",
            acquisitive_end="03/04/2023",
            enjoyment_start="2024-06-01",
            days_granted=30,
            reported_remaining=45,
        )
    )
    periodos = compute_periods(registros)

    assert [p.key for p in periodos] == [(2013, 2018), (2018, 2023)]
    assert periodos[0].invalidated_records == []
    assert periodos[1].invalidated_records == [registros[2], registros[3]]
    assert DataIssue.BALANCE_MISMATCH in periodos[1].issues
    assert periodos[1].last_reported_remaining == 45


def test_direito_segue_quinquenios():
    registros = [
        criar_registro(acquisitive_start="01/01/2013", acquisitive_end="31/12/2023", reported_remaining=150),
    ]
    (periodo,) = compute_periods(registros)
    assert periodo.quinquennia_count == 2
    assert periodo.days_entitled == 180
    for p in compute_periods(servidor_dois_periodos()):
        esperado = 90 * max(1, math.ceil((p.end_year - p.start_year) / 5))
        assert p.days_entitled == esperado


def test_total_usado_bate_com_soma_dos_registros_agrupados():
    registros = servidor_dois_periodos() + [
        criar_registro(acquisitive_start="30/12/1899", acquisitive_end="30/12/1899", days_granted=15),
    ]
    resumo = compute_balance(registros)
    periodos = compute_periods(registros)

    agrupados = [r for p in periodos for r in p.records]
    assert resumo.total_used == sum(p.days_used for p in periodos)
    assert resumo.total_used == sum(r.days_granted for r in agrupados)
    # o registro 1899 fica de fora, como uso sem período
    assert resumo.unassigned_days == 15
    assert DataIssue.SENTINEL_DATE in resumo.issues


def test_idempotente_e_sem_mutacao():
    registros = servidor_dois_periodos()
    copia = copy.deepcopy(registros)

    primeiro = compute_balance(registros)
    segundo = compute_balance(registros)

    assert registros == copia
    assert primeiro == segundo
    assert compute_periods(registros) == compute_periods(registros)


def test_servidor_sem_datas_aquisitivas_usa_periodo_sintetico():
    registros = [
        criar_registro(acquisitive_start=None, acquisitive_end=None, enjoyment_start="10/01/2020", reported_remaining=60),
    ]
    (periodo,) = compute_periods(registros)
    assert periodo.synthetic
    assert periodo.key == (2020, 2020)
    assert periodo.days_entitled == 90
    resumo = compute_balance(registros)
    assert DataIssue.MISSING_ACQUISITIVE_DATES in resumo.issues
    assert resumo.earliest_acquisitive_start is None


def test_lista_vazia_retorna_zeros():
    resumo = compute_balance([])
    assert resumo.total_entitled == 0
    assert resumo.total_used == 0
    assert resumo.available == 0
    assert resumo.periods_count == 0
    assert not resumo.has_data


def test_somente_sentinelas_retorna_zeros():
    registros = [criar_registro(acquisitive_start="1899-12-30", acquisitive_end="1899-12-30")]
    resumo = compute_balance(registros)
    assert resumo.periods_count == 0
    assert resumo.available == 0
    assert resumo.unassigned_records == registros


def test_configuracao_injetada():
    config = Settings(DIAS_POR_QUINQUENIO=60)
    registros = [criar_registro(days_granted=30, reported_remaining=30)]
    resumo = compute_balance(registros, config)
    assert resumo.total_entitled == 60
    assert resumo.invalidated_count == 0


def test_entrada_invalida_viola_contrato():
    with pytest.raises(ContractViolation):
        compute_balance(None)
    with pytest.raises(ContractViolation):
        compute_periods([criar_registro(), "linha"])


def test_checagem_do_restando_atravessa_os_periodos():
    # Arrange
    registros = servidor_dois_periodos()
    # Act
    periodos = compute_periods(registros)
    # Assert
    assert periodos[0].invalidated_records == []
    assert DataIssue.BALANCE_MISMATCH not in periodos[0].issues
    assert periodos[1].invalidated_records == [registros[2]]
    assert DataIssue.BALANCE_MISMATCH in periodos[1].issues


def test_registros_fora_de_ordem_sao_checados_pela_data_de_gozo():
    # Arrange: o período mais novo foi lançado primeiro na planilha
    registros = list(reversed(servidor_dois_periodos()))
    # Act
    resumo = compute_balance(registros)
    periodos = compute_periods(registros)
    # Assert
    assert resumo.invalidated_count == 1
    assert periodos[1].invalidated_records == [registros[0]]


def test_registro_1899_com_restando_divergente_aparece_no_resumo():
    # Arrange
    valido = criar_registro(enjoyment_start="01/02/2019", days_granted=30, reported_remaining=60)
    sentinela = criar_registro(
        acquisitive_start="30/12/1899",
        acquisitive_end="30/12/1899",
        enjoyment_start="01/08/2019",
        days_granted=30,
        reported_remaining=50,
    )
    # Act
    resumo = compute_balance([valido, sentinela])
    periodos = compute_periods([valido, sentinela])
    # Assert
    assert resumo.unassigned_records == [sentinela]
    assert resumo.unassigned_invalidated_records == [sentinela]
    assert resumo.invalidated_count == 1
    assert DataIssue.BALANCE_MISMATCH in resumo.issues
    # o período continua limpo e o registro 1899 não entra no uso
    assert periodos[0].invalidated_records == []
    assert resumo.total_used == 30


def test_registro_1899_sem_gozo_datado_nao_e_checado():
    sentinela = criar_registro(
        acquisitive_start="30/12/1899",
        acquisitive_end="30/12/1899",
        enjoyment_start=None,
        reported_remaining=5,
    )
    resumo = compute_balance([criar_registro(), sentinela])
    assert resumo.unassigned_records == [sentinela]
    assert resumo.unassigned_invalidated_records == []
    assert resumo.invalidated_count == 0


def test_configuracao_explicita_nao_e_trocada_pelo_padrao():
    config = Settings(DIAS_POR_QUINQUENIO=0)
    registros = [criar_registro(days_granted=0, reported_remaining=0)]
    resumo = compute_balance(registros, config)
    assert resumo.total_entitled == 0
    assert resumo.invalidated_count == 0
