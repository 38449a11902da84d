'''
álgebra de slots: (offset, ancho), disyunción y partición de operandos en fragmentos
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .diagnostics import fail
from .utils import WORD_BITS, field_mask, mask

# Offsets absolutos de cada letra de slot dentro de la palabra de 32 bits
SLOT_OFFSETS: Dict[str, int] = {
    "d": 0,
    "j": 5,
    "k": 10,
    "a": 15,
    "m": 16,
}

_OFFSET_TO_LETTER: Dict[int, str] = {v: k for k, v in SLOT_OFFSETS.items()}

def slot_offset(letter: str) -> int:
    """Offset de una letra de slot (acepta mayúsculas)."""
    try:
        return SLOT_OFFSETS[letter.lower()]
    except KeyError:
        raise fail(f"Letra de slot desconocida: {letter!r}",
                   hint="se esperaba una de " + "".join(SLOT_OFFSETS)) from None

def slot_letter(offset: int) -> str:
    """Letra (minúscula) del slot que empieza en 'offset'."""
    try:
        return _OFFSET_TO_LETTER[offset]
    except KeyError:
        raise fail(f"No hay slot con nombre en el offset {offset}") from None

@dataclass(frozen=True)
class Slot:
    """Rango contiguo de bits [offset, offset+width) de la palabra."""
    offset: int
    width: int

    @property
    def letter(self) -> str:
        return slot_letter(self.offset)

    @property
    def field_mask(self) -> int:
        return field_mask(self.offset, self.width)

    @property
    def end(self) -> int:
        return self.offset + self.width

    def canonical_repr(self) -> str:
        """p.ej. Slot(10, 12) -> 'k12'."""
        return f"{self.letter}{self.width}"

    def overlaps(self, other: "Slot") -> bool:
        return self.offset < other.end and other.offset < self.end

def check_slots(slots: Iterable[Slot]) -> None:
    """Verifica que todos los slots caben en la palabra y son disjuntos dos a dos.

    Un solapamiento es un defecto de la descripción de entrada: se aborta.
    """
    seen: List[Slot] = []
    for s in slots:
        if s.width <= 0 or s.offset < 0 or s.end > WORD_BITS:
            raise fail(f"Slot fuera de la palabra: offset={s.offset} ancho={s.width}",
                       hint=f"debe caber en [0, {WORD_BITS})")
        if s.offset not in _OFFSET_TO_LETTER:
            raise fail(f"Slot en un offset sin nombre: offset={s.offset} ancho={s.width}",
                       hint="offsets válidos: " + ", ".join(f"{l}={o}" for l, o in SLOT_OFFSETS.items()))
        for prev in seen:
            if s.overlaps(prev):
                raise fail(f"Slots solapados: {prev.canonical_repr()} y {s.canonical_repr()}")
        seen.append(s)

def slots_mask(slots: Iterable[Slot]) -> int:
    """OR de las máscaras de todos los slots."""
    m = 0
    for s in slots:
        m |= s.field_mask
    return m

@dataclass(frozen=True)
class Fragment:
    """Parte de un operando que va a un slot: ((valor >> shift) & mask) << offset."""
    offset: int
    width: int
    shift: int
    mask: int

    def extract(self, value: int) -> int:
        if self.shift > 0:
            value >>= self.shift
        return value & self.mask

def fragments(slots: Sequence[Slot]) -> Tuple[Fragment, ...]:
    """Parte un operando repartido en varios slots (listados MSB primero).

    Ej. Sd5k16 = (MSB) DDDDDKKKKKKKKKKKKKKKK (LSB), ancho total 21:
      d5  -> restante 16 -> (v >> 16) & 0x1f
      k16 -> restante 0  ->  v & 0xffff
    """
    if not slots:
        raise ValueError("un operando necesita al menos un slot")
    remaining = sum(s.width for s in slots)
    out = []
    for s in slots:
        remaining -= s.width
        out.append(Fragment(offset=s.offset, width=s.width, shift=remaining, mask=mask(s.width)))
    return tuple(out)

def split_value(value: int, slots: Sequence[Slot]) -> Tuple[int, ...]:
    """Valores de cada fragmento, en el orden de 'slots'."""
    return tuple(f.extract(value) for f in fragments(slots))

def join_fragments(values: Sequence[int], slots: Sequence[Slot]) -> int:
    """Inversa de split_value: recompone el valor lógico (sin signo)."""
    if len(values) != len(slots):
        raise ValueError("un valor por slot")
    out = 0
    for v, s in zip(values, slots):
        out = (out << s.width) | (v & mask(s.width))
    return out
