'''
clases de registros (GPR, FPR, FCC) y excepciones por instrucción
'''

from __future__ import annotations
from typing import Dict, FrozenSet, Mapping, Optional

from .formats import ArgKind, rule

# Número de registros de cada clase; se deriva del ancho del slot
REG_CLASS_SIZE: Dict[ArgKind, int] = {
    k: 1 << rule(k).reg_width  # type: ignore[operator]
    for k in (ArgKind.INT_REG, ArgKind.FP_REG, ArgKind.FCC_REG)
}

_REG_PREFIX = {
    ArgKind.INT_REG: "r",
    ArgKind.FP_REG: "f",
    ArgKind.FCC_REG: "fcc",
}

# mnemónico -> {clase: registros no admitidos en esa instrucción}
RegExceptions = Mapping[str, Mapping[ArgKind, FrozenSet[int]]]

# Las reglas reales viven en las descripciones de entrada; por defecto no hay ninguna
DEFAULT_EXCEPTIONS: RegExceptions = {}

def reg_name(kind: ArgKind, num: int) -> str:
    """Nombre legible, p.ej. (FP_REG, 3) -> 'f3'."""
    return f"{_REG_PREFIX[kind]}{num}"

class RegisterContext:
    """Decide si un número de registro pertenece a su clase para una instrucción dada."""

    def __init__(self, exceptions: Optional[RegExceptions] = None):
        self.exceptions: RegExceptions = DEFAULT_EXCEPTIONS if exceptions is None else exceptions
        for mnemonic, per_kind in self.exceptions.items():
            for kind in per_kind:
                if kind not in REG_CLASS_SIZE:
                    raise ValueError(f"{mnemonic}: {kind.value} no es una clase de registro")

    def excluded(self, mnemonic: str, kind: ArgKind) -> FrozenSet[int]:
        return self.exceptions.get(mnemonic, {}).get(kind, frozenset())

    def is_member(self, mnemonic: str, kind: ArgKind, num: int) -> bool:
        if kind not in REG_CLASS_SIZE:
            raise ValueError(f"{kind.value} no es una clase de registro")
        if not 0 <= num < REG_CLASS_SIZE[kind]:
            return False
        return num not in self.excluded(mnemonic, kind)
