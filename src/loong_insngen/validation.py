'''
generador de validadores: contrato de rangos por argumento de cada formato
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

from .formats import Arg, ArgKind, InsnFormat
from .records import InsnRecord
from .regs import REG_CLASS_SIZE, RegisterContext, reg_name
from .utils import is_signed_nbit, is_unsigned_nbit, signed_range, unsigned_range

@dataclass(frozen=True)
class ArgCheck:
    """Comprobación de un argumento: tipo, ancho lógico y rango cerrado [lo, hi]."""
    index: int
    name: str     # nombre canónico en minúsculas, p.ej. 'sk12'
    kind: ArgKind
    width: int
    lo: int
    hi: int

@dataclass(frozen=True)
class BoundViolation:
    arg_index: int
    arg_name: str
    value: int
    message: str

    def __str__(self) -> str:
        return self.message

def _reg_bounds(a: Arg) -> Tuple[int, int]:
    return 0, REG_CLASS_SIZE[a.kind] - 1

# Estrategia por tipo: cálculo del rango admitido
_BOUNDS: Dict[ArgKind, Callable[[Arg], Tuple[int, int]]] = {
    ArgKind.INT_REG: _reg_bounds,
    ArgKind.FP_REG: _reg_bounds,
    ArgKind.FCC_REG: _reg_bounds,
    ArgKind.SIGNED_IMM: lambda a: signed_range(a.total_width),
    ArgKind.UNSIGNED_IMM: lambda a: unsigned_range(a.total_width),
}

# Pertenencia al rango de un inmediato de n bits
_IN_RANGE: Dict[ArgKind, Callable[[int, int], bool]] = {
    ArgKind.SIGNED_IMM: is_signed_nbit,
    ArgKind.UNSIGNED_IMM: is_unsigned_nbit,
}

def checks_for(fmt: InsnFormat) -> Tuple[ArgCheck, ...]:
    out = []
    for i, a in enumerate(fmt.args):
        lo, hi = _BOUNDS[a.kind](a)
        out.append(ArgCheck(index=i, name=a.canonical_repr().lower(), kind=a.kind,
                            width=a.total_width, lo=lo, hi=hi))
    return tuple(out)

class FormatValidator:
    """Validador de un formato; los argumentos se comprueban en orden y gana el primer fallo."""

    def __init__(self, fmt: InsnFormat):
        self.format = fmt
        self.checks = checks_for(fmt)

    @property
    def name(self) -> str:
        return "validate" + self.format.canonical_repr()

    def validate(self, record: InsnRecord, values: Sequence[int],
                 regs: Optional[RegisterContext] = None) -> Optional[BoundViolation]:
        if len(values) != len(self.checks):
            raise ValueError(f"{record.mnemonic}: se esperaban {len(self.checks)} operandos, hay {len(values)}")
        ctx = regs or RegisterContext()
        for c, v in zip(self.checks, values):
            if c.kind in REG_CLASS_SIZE:
                if not ctx.is_member(record.mnemonic, c.kind, v):
                    if 0 <= v <= c.hi:
                        what = f"{reg_name(c.kind, v)} no admitido en {record.mnemonic}"
                    else:
                        what = f"registro {c.kind.value} fuera de rango (0..{c.hi})"
                    return BoundViolation(c.index, c.name, v, f"{record.mnemonic}: operando {c.name}: {what}: {v}")
            elif not _IN_RANGE[c.kind](v, c.width):
                sign = "con signo" if c.kind is ArgKind.SIGNED_IMM else "sin signo"
                return BoundViolation(c.index, c.name, v,
                                      f"{record.mnemonic}: operando {c.name}: inmediato de {c.width} bits "
                                      f"{sign} fuera de rango ({c.lo}..{c.hi}): {v}")
        return None

def validator_for(fmt: InsnFormat) -> FormatValidator:
    return FormatValidator(fmt)
