# src/loong_insngen/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .catalog import SlotCombination, combination_for
from .formats import ArgKind, InsnFormat
from .slots import fragments
from .utils import mask, u32

# ---------------- Plan de empaquetado ----------------

@dataclass(frozen=True)
class SlotExpr:
    """Valor que va a un slot: ((arg >> shift) & mask) << offset.

    shift == 0 no desplaza; mask None pasa el valor tal cual (registros e
    inmediatos sin signo de un solo slot, ya validados).
    """
    offset: int
    arg_index: int
    shift: int = 0
    mask: Optional[int] = None

    def evaluate(self, value: int) -> int:
        if self.shift > 0:
            value >>= self.shift
        if self.mask is not None:
            value &= self.mask
        return value

def plan_for(fmt: InsnFormat) -> Tuple[SlotExpr, ...]:
    """Expresiones por slot, en el orden de la combinación de slots del formato."""
    by_offset: Dict[int, SlotExpr] = {}
    for i, a in enumerate(fmt.args):
        if len(a.slots) == 1:
            s = a.slots[0]
            if a.kind is ArgKind.SIGNED_IMM:
                # el acumulador es sin signo: truncar en complemento a dos
                by_offset[s.offset] = SlotExpr(s.offset, i, mask=mask(a.total_width))
            else:
                by_offset[s.offset] = SlotExpr(s.offset, i)
            continue
        for frag in fragments(a.slots):
            by_offset[frag.offset] = SlotExpr(frag.offset, i, shift=frag.shift, mask=frag.mask)
    return tuple(by_offset[off] for off in combination_for(fmt).offsets)

# ---------------- Codificador por formato ----------------

class FormatEncoder:
    """Empaquetado de un formato: bits base | contribución de cada argumento.

    No valida; los operandos deben haber pasado antes por el validador.
    """

    def __init__(self, fmt: InsnFormat):
        self.format = fmt
        self.combination: Optional[SlotCombination] = None if fmt.is_empty else combination_for(fmt)
        self.plan = plan_for(fmt)

    @property
    def name(self) -> str:
        return "encode" + self.format.canonical_repr()

    def slot_values(self, values: Sequence[int]) -> List[int]:
        if len(values) != len(self.format.args):
            raise ValueError(f"{self.format}: se esperaban {len(self.format.args)} operandos, hay {len(values)}")
        return [e.evaluate(values[e.arg_index]) for e in self.plan]

    def encode(self, base_bits: int, values: Sequence[int]) -> int:
        slot_values = self.slot_values(values)
        if self.combination is None:
            return u32(base_bits)
        return self.combination.combine(base_bits, *slot_values)

def encoder_for(fmt: InsnFormat) -> FormatEncoder:
    return FormatEncoder(fmt)

def encode(base_bits: int, fmt: InsnFormat, values: Sequence[int]) -> int:
    return encoder_for(fmt).encode(base_bits, values)
