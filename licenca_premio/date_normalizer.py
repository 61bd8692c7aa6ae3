# licenca_premio/date_normalizer.py
"""
Normalização de datas da planilha de licença prêmio.

Único ponto do projeto que resolve a ambiguidade de formatos. Aceita:
  - date / datetime / pandas.Timestamp
  - "dd/mm/aaaa" (com ou sem horário depois)
  - "aaaa-mm-dd" (com "T" ou espaço e horário depois)
  - número serial do Excel (dias desde 30/12/1899)
O resultado é sempre um DateValue em um de três estados: VALID, SENTINEL
(ano 1899, marcador de célula vazia da planilha) ou INVALID.
"""

import math
import numbers
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional

import pandas as pd

from .logging_config import log
from .config import settings

EXCEL_EPOCH = date(1899, 12, 30)

_DATA_BR = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})(?:\s|$)")
_DATA_ISO = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T\s]|$)")
_VAZIOS = {"", "-", "--", "nan", "nat", "none", "null"}


class DateStatus(str, Enum):
    VALID = "valid"
    SENTINEL = "sentinel"
    INVALID = "invalid"


@dataclass(frozen=True)
class DateValue:
    status: DateStatus
    value: Optional[date] = None
    absent: bool = False

    @property
    def is_valid(self) -> bool:
        return self.status is DateStatus.VALID

    @property
    def is_sentinel(self) -> bool:
        return self.status is DateStatus.SENTINEL

    @property
    def is_invalid(self) -> bool:
        return self.status is DateStatus.INVALID

    @property
    def year(self) -> Optional[int]:
        if self.value is not None:
            return self.value.year
        if self.is_sentinel:
            return settings.ANO_SENTINELA
        return None


def _absent() -> DateValue:
    return DateValue(DateStatus.INVALID, absent=True)


def _classificar(valor: date, ano_sentinela: int) -> DateValue:
    if valor.year == ano_sentinela:
        return DateValue(DateStatus.SENTINEL, valor)
    return DateValue(DateStatus.VALID, valor)


def _de_texto(texto: str) -> Optional[date]:
    match = _DATA_BR.match(texto)
    if match:
        dia, mes, ano = (int(p) for p in match.groups())
        return date(ano, mes, dia)
    match = _DATA_ISO.match(texto)
    if match:
        ano, mes, dia = (int(p) for p in match.groups())
        return date(ano, mes, dia)
    return None


def normalize_date(valor: Any, ano_sentinela: Optional[int] = None) -> DateValue:
    """Converte qualquer representação de data da planilha em um DateValue."""
    if ano_sentinela is None:
        ano_sentinela = settings.ANO_SENTINELA

    # None, NaN e pandas.NaT: célula vazia
    if valor is None:
        return _absent()
    if pd.api.types.is_scalar(valor) and pd.isna(valor):
        return _absent()

    if isinstance(valor, datetime):
        return _classificar(valor.date(), ano_sentinela)
    if isinstance(valor, date):
        return _classificar(valor, ano_sentinela)

    if isinstance(valor, bool):
        return DateValue(DateStatus.INVALID)

    # Número serial do Excel
    if isinstance(valor, numbers.Real):
        if not math.isfinite(valor):
            return DateValue(DateStatus.INVALID)
        dias = int(valor)
        if dias == 0:
            return DateValue(DateStatus.SENTINEL, EXCEL_EPOCH)
        if dias < 0:
            log.debug(f"Serial de data negativo ignorado: {valor}")
            return DateValue(DateStatus.INVALID)
        try:
            return _classificar(EXCEL_EPOCH + timedelta(days=dias), ano_sentinela)
        except OverflowError:
            log.debug(f"Serial de data fora do intervalo: {valor}")
            return DateValue(DateStatus.INVALID)

    if isinstance(valor, str):
        texto = valor.strip()
        if texto.lower() in _VAZIOS:
            return _absent()
        try:
            data = _de_texto(texto)
        except ValueError:
            data = None
        if data is None:
            log.debug(f"Data não reconhecida: '{valor}'")
            return DateValue(DateStatus.INVALID)
        return _classificar(data, ano_sentinela)

    log.debug(f"Tipo de data não suportado: {type(valor).__name__}")
    return DateValue(DateStatus.INVALID)
