# tests/test_usage_aggregator.py

from licenca_premio.models import LicenseRecord
from licenca_premio.usage_aggregator import aggregate_usage, chronological


def criar_registro(inicio, gozo, restando=None) -> LicenseRecord:
    return LicenseRecord(
        holder_id="001",
        acquisitive_start="01/01/2010",
        acquisitive_end="31/12/2015",
        enjoyment_start=inicio,
        days_granted=gozo,
        reported_remaining=restando,
    )


def test_soma_gozo_e_pega_ultimo_restando_cronologico():
    # Entrada fora de ordem: o último cronológico é o de 2021
    registros = [
        criar_registro("01/03/2021", 30, 30),
        criar_registro("01/01/2020", 30, 60),
    ]
    uso = aggregate_usage(registros, 90)
    assert uso.days_used == 60
    assert uso.last_reported_remaining == 30
    assert uso.has_reported_value


def test_sem_restando_informado_herda_direito():
    uso = aggregate_usage([criar_registro("01/01/2020", 30)], 90)
    assert uso.days_used == 30
    assert uso.last_reported_remaining == 90
    assert not uso.has_reported_value


def test_periodo_vazio():
    uso = aggregate_usage([], 180)
    assert uso.days_used == 0
    assert uso.last_reported_remaining == 180


def test_empate_de_inicio_mantem_ordem_de_ingestao():
    primeiro = criar_registro("01/01/2020", 10, 80)
    segundo = criar_registro("2020-01-01", 10, 70)
    assert chronological([primeiro, segundo]) == [primeiro, segundo]
    assert aggregate_usage([primeiro, segundo], 90).last_reported_remaining == 70


def test_gozo_sem_data_vai_para_o_comeco():
    sem_data = criar_registro(None, 10, 10)
    com_data = criar_registro("01/01/2020", 10, 80)
    assert chronological([com_data, sem_data]) == [sem_data, com_data]
