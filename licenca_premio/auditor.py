# licenca_premio/auditor.py
"""
Varredura de todos os servidores de uma planilha: balanço de cada um e
quantidade de RESTANDO divergente, ordenado pelos casos mais problemáticos.
"""

from typing import Mapping, Optional, Sequence, Union

import pandas as pd

from .logging_config import log
from .balance import compute_balance
from .config import Settings
from .data_validation import records_from_dataframe
from .errors import ContractViolation
from .models import LicenseRecord

AUDIT_COLUMNS = [
    "Servidor",
    "Periodos",
    "DiasGanhos",
    "DiasUsados",
    "Disponivel",
    "Divergencia",
    "Anomalias",
    "SemPeriodo",
    "Problemas",
    "Status",
]


def audit_holders(
    dados: Union[pd.DataFrame, Mapping[str, Sequence[LicenseRecord]]],
    config: Optional[Settings] = None,
) -> pd.DataFrame:
    if isinstance(dados, pd.DataFrame):
        dados = records_from_dataframe(dados)
    elif not isinstance(dados, Mapping):
        raise ContractViolation(
            f"Esperado DataFrame ou mapa servidor -> registros, recebido {type(dados).__name__}"
        )

    log.info(f"[Auditor] Iniciando auditoria de {len(dados)} servidor(es)...")

    linhas = []
    for servidor, registros in dados.items():
        resumo = compute_balance(list(registros), config)
        tem_divergencia = resumo.invalidated_count > 0
        linhas.append(
            {
                "Servidor": servidor,
                "Periodos": resumo.periods_count,
                "DiasGanhos": resumo.total_entitled,
                "DiasUsados": resumo.total_used,
                "Disponivel": resumo.available,
                "Divergencia": resumo.divergence,
                "Anomalias": resumo.invalidated_count,
                "SemPeriodo": len(resumo.unassigned_records),
                "Problemas": "; ".join(issue.value for issue in resumo.issues),
                "Status": "DIVERGENTE" if tem_divergencia else "OK",
            }
        )

    df_auditoria = pd.DataFrame(linhas, columns=AUDIT_COLUMNS)
    df_auditoria = df_auditoria.sort_values(
        ["Anomalias", "Servidor"], ascending=[False, True], ignore_index=True
    )

    divergentes = int((df_auditoria["Status"] == "DIVERGENTE").sum())
    log.success(f"[Auditor] Auditoria concluída: {divergentes} servidor(es) com divergência.")
    return df_auditoria
