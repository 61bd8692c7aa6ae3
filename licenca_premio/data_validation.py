# esse modulo transforma as linhas da planilha de licença prêmio (ja carregadas num DataFrame) em registros do motor de calculo. Cada linha passa pelo pydantic, que limpa os campos sujos (GOZO "30(DIAS)", RESTANDO "(0) DIAS", celulas NaN) e rejeita linhas sem nome; linhas rejeitadas sao logadas e puladas, sem quebrar o processamento

# licenca_premio/data_validation.py

import pandas as pd
from pydantic import BaseModel, ValidationError, field_validator
from typing import Any, Dict, List, Optional

from .logging_config import log
from .errors import ContractViolation
from .models import LicenseRecord
from .shared.utils import parse_days_granted, parse_int_loose

# Nomes de coluna aceitos para cada campo (comparação sem diferenciar maiúsculas)
COLUMN_ALIASES: Dict[str, List[str]] = {
    "nome": ["NOME", "SERVIDOR", "NOME_SERVIDOR"],
    "cpf": ["CPF"],
    "acquisitive_start": ["AQUISITIVO_INICIO", "AQUISITIVOINICIO", "AQUISITIVO INICIO"],
    "acquisitive_end": ["AQUISITIVO_FIM", "AQUISITIVOFIM", "AQUISITIVO FIM"],
    "enjoyment_start": ["A_PARTIR", "A PARTIR", "INICIO", "INÍCIO"],
    "enjoyment_end": ["TERMINO", "TÉRMINO", "FINAL", "FIM"],
    "days_granted": ["GOZO", "DIAS"],
    "reported_remaining": ["RESTANDO", "SALDO", "DIAS RESTANTES", "DIAS_RESTANDO"],
}


def _vazio(v: Any) -> bool:
    return v is None or (pd.api.types.is_scalar(v) and pd.isna(v))


class LicenseRowModel(BaseModel):
    nome: str
    cpf: Optional[str] = None
    acquisitive_start: Any = None
    acquisitive_end: Any = None
    enjoyment_start: Any = None
    enjoyment_end: Any = None
    days_granted: int = 0
    reported_remaining: Optional[int] = None

    @field_validator("nome", mode="before")
    @classmethod
    def clean_nome(cls, v: Any):
        if _vazio(v) or not str(v).strip():
            raise ValueError("linha sem nome de servidor")
        return str(v).strip()

    @field_validator("cpf", mode="before")
    @classmethod
    def clean_cpf(cls, v: Any):
        if _vazio(v):
            return None
        texto = str(v).strip()
        return texto or None

    @field_validator(
        "acquisitive_start", "acquisitive_end", "enjoyment_start", "enjoyment_end", mode="before"
    )
    @classmethod
    def clean_nan_values(cls, v: Any):
        """Converte qualquer valor 'nan'/NaT em None; o resto segue cru para o normalizador."""
        if _vazio(v):
            return None
        return v

    @field_validator("days_granted", mode="before")
    @classmethod
    def parse_gozo(cls, v: Any):
        return parse_days_granted(None if _vazio(v) else v)

    @field_validator("reported_remaining", mode="before")
    @classmethod
    def parse_restando(cls, v: Any):
        return None if _vazio(v) else parse_int_loose(v)

    @property
    def holder_key(self) -> str:
        # Chave única: CPF (se tiver) ou NOME normalizado
        return self.cpf or self.nome.upper()

    def to_record(self) -> LicenseRecord:
        return LicenseRecord(
            holder_id=self.holder_key,
            acquisitive_start=self.acquisitive_start,
            acquisitive_end=self.acquisitive_end,
            enjoyment_start=self.enjoyment_start,
            enjoyment_end=self.enjoyment_end,
            days_granted=self.days_granted,
            reported_remaining=self.reported_remaining,
        )


def resolve_columns(columns) -> Dict[str, Any]:
    por_nome = {str(c).strip().upper(): c for c in columns}
    resolvidas = {}
    for campo, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in por_nome:
                resolvidas[campo] = por_nome[alias]
                break
    return resolvidas


def records_from_dataframe(df: pd.DataFrame) -> Dict[str, List[LicenseRecord]]:
    """
    Agrupa as linhas da planilha por servidor. Linhas que falham na validação
    são logadas e ignoradas, sem interromper as demais.
    """
    if not isinstance(df, pd.DataFrame):
        raise ContractViolation(f"Esperado pandas.DataFrame, recebido {type(df).__name__}")

    log.info(f"Iniciando normalização de {len(df)} linha(s) da planilha de licenças...")

    colunas = resolve_columns(df.columns)
    faltando = [campo for campo in ("nome", "days_granted") if campo not in colunas]
    if faltando:
        log.warning(f"Colunas não encontradas na planilha: {faltando}")

    por_servidor: Dict[str, List[LicenseRecord]] = {}
    ignoradas = 0
    for index, row in df.iterrows():
        row_data = {campo: row[coluna] for campo, coluna in colunas.items()}
        try:
            modelo = LicenseRowModel(**row_data)
        except ValidationError as e:
            log.error(f"Linha {index} ignorada: {e}")
            ignoradas += 1
            continue
        por_servidor.setdefault(modelo.holder_key, []).append(modelo.to_record())

    log.success(
        f"Normalização concluída: {len(por_servidor)} servidor(es), {ignoradas} linha(s) ignorada(s)."
    )
    return por_servidor
