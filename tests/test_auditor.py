# tests/test_auditor.py

import pandas as pd
import pytest

from licenca_premio.auditor import AUDIT_COLUMNS, audit_holders
from licenca_premio.errors import ContractViolation
from licenca_premio.models import LicenseRecord


def criar_df_teste() -> pd.DataFrame:
    base = {
        "AQUISITIVO_INICIO": "04/04/2013",
        "AQUISITIVO_FIM": "03/04/2018",
        "TERMINO": None,
        "GOZO": "30",
    }
    return pd.DataFrame([
        {**base, "NOME": "Abilio", "A_PARTIR": "01/02/2019", "RESTANDO": "60"},
        {**base, "NOME": "Abilio", "A_PARTIR": "01/08/2019", "RESTANDO": "30"},
        {**base, "NOME": "Acacia", "A_PARTIR": "01/02/2019", "RESTANDO": "60"},
        # gozo lançado sem atualizar o saldo
        {**base, "NOME": "Acacia", "A_PARTIR": "01/08/2019", "RESTANDO": "60"},
    ])


def test_auditoria_ordena_divergentes_primeiro():
    # Act
    df_auditoria = audit_holders(criar_df_teste())
    # Assert
    assert list(df_auditoria.columns) == AUDIT_COLUMNS
    assert list(df_auditoria["Servidor"]) == ["ACACIA", "ABILIO"]

    acacia = df_auditoria.iloc[0]
    assert acacia["Status"] == "DIVERGENTE"
    assert acacia["Anomalias"] == 1
    assert acacia["DiasUsados"] == 60
    assert acacia["Disponivel"] == 60
    assert "BalanceMismatch" in acacia["Problemas"]

    abilio = df_auditoria.iloc[1]
    assert abilio["Status"] == "OK"
    assert abilio["Disponivel"] == 30
    assert abilio["Divergencia"] == 0


def test_auditoria_aceita_mapa_de_registros():
    dados = {"001": [LicenseRecord("001", "01/01/2010", "01/01/2015", "01/01/2016", None, 90, 0)]}
    df_auditoria = audit_holders(dados)
    assert len(df_auditoria) == 1
    assert df_auditoria.loc[0, "Status"] == "OK"
    assert df_auditoria.loc[0, "Disponivel"] == 0


def test_auditoria_sem_servidores():
    df_auditoria = audit_holders({})
    assert df_auditoria.empty
    assert list(df_auditoria.columns) == AUDIT_COLUMNS


def test_entrada_invalida_viola_contrato():
    with pytest.raises(ContractViolation):
        audit_holders([1, 2, 3])
