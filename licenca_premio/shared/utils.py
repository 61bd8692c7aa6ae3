import math
import numbers
import re
from typing import Any, Optional

_PRIMEIRO_INTEIRO = re.compile(r"-?\d+")


def parse_int_loose(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Extrai o primeiro inteiro de um valor sujo da planilha.
    Formatos vistos no GOZO/RESTANDO: "30", "30(DIAS)", "(0) DIAS", "0(ZERO)", 60.0."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        # NaN e infinito não viram inteiro
        if not math.isfinite(value):
            return default
        return int(value)
    match = _PRIMEIRO_INTEIRO.search(str(value))
    if not match:
        return default
    return int(match.group(0))


def parse_days_granted(value: Any) -> int:
    """GOZO nunca é negativo: o sinal é descartado ("-30" conta 30 dias).
    Ausente ou ilegível conta como 0 dias."""
    dias = parse_int_loose(value, default=0)
    return abs(dias)
