# licenca_premio/errors.py
"""
Erros e anotações de qualidade de dados do motor de licença prêmio.

Somente ContractViolation é lançada: indica erro de programação de quem chama
(entrada que não é uma lista de registros, datas de tipo errado, etc.).
Problemas de qualidade da planilha nunca interrompem o cálculo; eles viram
anotações DataIssue anexadas ao período ou ao resumo do servidor.
"""

from enum import Enum


class ContractViolation(TypeError):
    """Entrada fora do contrato da função (não é problema de dado da planilha)."""


class DataIssue(str, Enum):
    MALFORMED_DATE = "MalformedDate"
    SENTINEL_DATE = "SentinelDate"
    BALANCE_MISMATCH = "BalanceMismatch"
    MISSING_ACQUISITIVE_DATES = "MissingAcquisitiveDates"
