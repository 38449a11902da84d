'''
catálogo de formatos (deduplicados por firma) y registro de combinaciones de slots
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .formats import InsnFormat
from .records import InsnRecord
from .slots import slot_offset
from .utils import u32

def gather_formats(records: Iterable[InsnRecord]) -> List[InsnFormat]:
    """Formatos distintos, ordenados por nombre canónico.

    El primero que aparece gana; los siguientes con la misma firma son idénticos.
    """
    by_name: Dict[str, InsnFormat] = {}
    for r in records:
        name = r.format.canonical_repr()
        if name not in by_name:
            by_name[name] = r.format
    return [by_name[k] for k in sorted(by_name)]

@dataclass(frozen=True)
class SlotCombination:
    """Conjunto ordenado de offsets que aparecen juntos en algún formato.

    Se comparte el combinador 'bits | a<<x | b<<y ...' entre todos los formatos
    con la misma disposición física, sea cual sea el tipo de sus argumentos.
    """
    code: str    # p.ej. 'DJK'

    @property
    def offsets(self) -> Tuple[int, ...]:
        return tuple(slot_offset(c) for c in self.code)

    @property
    def letters(self) -> str:
        return self.code.lower()

    def combine(self, bits: int, *values: int) -> int:
        if len(values) != len(self.code):
            raise ValueError(f"{self.code}: se esperaban {len(self.code)} valores, hay {len(values)}")
        out = bits
        for off, v in zip(self.offsets, values):
            out |= v << off
        return u32(out)

def combination_for(fmt: InsnFormat) -> SlotCombination:
    return SlotCombination(fmt.slot_combination())

def gather_slot_combinations(formats: Iterable[InsnFormat]) -> List[SlotCombination]:
    """Combinaciones distintas, ordenadas por código; el formato EMPTY no aporta ninguna."""
    codes = {f.slot_combination() for f in formats if not f.is_empty}
    return [SlotCombination(c) for c in sorted(codes)]

@dataclass(frozen=True)
class Catalog:
    """Modelo completo de una ejecución: registros, formatos y combinaciones."""
    records: Tuple[InsnRecord, ...]
    formats: Tuple[InsnFormat, ...]
    combinations: Tuple[SlotCombination, ...]

def build_catalog(records: Sequence[InsnRecord]) -> Catalog:
    formats = gather_formats(records)
    return Catalog(
        records=tuple(sorted(records, key=InsnRecord.sort_key)),
        formats=tuple(formats),
        combinations=tuple(gather_slot_combinations(formats)),
    )
