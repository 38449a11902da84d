'''
dataclass InsnRecord (mnemónico, palabra base, formato, atributos)
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional

from .diagnostics import fail
from .formats import InsnFormat
from .utils import U32_MASK, to_hex32

@dataclass(frozen=True)
class InsnRecord:
    """Descripción de una instrucción tal como llega del parser.

    - word: bits fijos del opcode (u32), se combinan con los operandos empaquetados
    - attribs: etiquetas '@nombre' o '@nombre=valor' (p.ej. 'qemu' para el backend TCG)
    """
    mnemonic: str
    word: int
    format: InsnFormat
    attribs: Dict[str, Optional[str]] = field(default_factory=dict, compare=False, hash=False)
    file: Optional[str] = field(default=None, compare=False)
    line: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.mnemonic:
            raise fail("Instrucción sin mnemónico", file=self.file, line=self.line)
        if not 0 <= self.word <= U32_MASK:
            raise fail(f"{self.mnemonic}: palabra base fuera de 32 bits: {self.word:#x}",
                       file=self.file, line=self.line)
        clash = self.word & self.format.operand_mask()
        if clash:
            raise fail(f"{self.mnemonic}: la palabra base {to_hex32(self.word)} pisa los slots "
                       f"del formato {self.format} (bits {to_hex32(clash)})",
                       file=self.file, line=self.line)

    def has_attrib(self, name: str) -> bool:
        return name in self.attribs

    def syntax(self) -> str:
        """Ejemplo de sintaxis, p.ej. 'addi.d d, j, sk12'."""
        if self.format.is_empty:
            return self.mnemonic
        return self.mnemonic + " " + ", ".join(a.canonical_repr().lower() for a in self.format.args)

    def sort_key(self):
        return (self.word, self.mnemonic)
