'''
tipos de argumento, Arg e InsnFormat con su nombre canónico (p.ej. DJSk12)
'''

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .diagnostics import fail
from .slots import Slot, SLOT_OFFSETS, check_slots, slot_letter, slot_offset, slots_mask

class ArgKind(Enum):
    INT_REG = "IntReg"
    FP_REG = "FPReg"
    FCC_REG = "FCCReg"
    SIGNED_IMM = "SignedImm"
    UNSIGNED_IMM = "UnsignedImm"

@dataclass(frozen=True)
class KindRule:
    """Todo lo que depende del tipo de argumento, en un solo sitio.

    - prefix: prefijo del nombre canónico ('' para registros enteros)
    - reg_width: ancho fijo del registro (None en inmediatos)
    - go_reg_fn / go_want_fn: helpers del backend Go
    - c_type: tipo del parámetro en el dialecto TCG
    """
    prefix: str
    is_imm: bool
    signed: bool = False
    reg_width: Optional[int] = None
    go_reg_fn: Optional[str] = None
    go_want_fn: str = ""
    c_type: str = "TCGReg"

KIND_RULES: Dict[ArgKind, KindRule] = {
    ArgKind.INT_REG: KindRule("", False, reg_width=5, go_reg_fn="regInt", go_want_fn="wantIntReg"),
    ArgKind.FP_REG: KindRule("F", False, reg_width=5, go_reg_fn="regFP", go_want_fn="wantFPReg"),
    ArgKind.FCC_REG: KindRule("C", False, reg_width=3, go_reg_fn="regFCC", go_want_fn="wantFCCReg"),
    ArgKind.SIGNED_IMM: KindRule("S", True, signed=True, go_want_fn="wantSignedImm", c_type="int32_t"),
    ArgKind.UNSIGNED_IMM: KindRule("U", True, go_want_fn="wantUnsignedImm", c_type="uint32_t"),
}

_PREFIX_TO_KIND = {r.prefix: k for k, r in KIND_RULES.items() if r.prefix}

def rule(kind: ArgKind) -> KindRule:
    return KIND_RULES[kind]

@dataclass(frozen=True)
class Arg:
    """Operando lógico, repartido en uno o más slots (MSB primero)."""
    kind: ArgKind
    slots: Tuple[Slot, ...]

    def __post_init__(self):
        if not self.slots:
            raise fail(f"Argumento {self.kind.value} sin slots")
        r = rule(self.kind)
        if not r.is_imm and (len(self.slots) != 1 or self.slots[0].width != r.reg_width):
            raise fail(f"Registro {self.kind.value} debe ocupar un único slot de {r.reg_width} bits")

    @property
    def is_imm(self) -> bool:
        return rule(self.kind).is_imm

    @property
    def total_width(self) -> int:
        return sum(s.width for s in self.slots)

    def canonical_repr(self) -> str:
        r = rule(self.kind)
        if self.kind is ArgKind.INT_REG:
            return self.slots[0].letter.upper()
        if not r.is_imm:
            return r.prefix + self.slots[0].letter
        return r.prefix + "".join(s.canonical_repr() for s in self.slots)

@dataclass(frozen=True)
class InsnFormat:
    """Formato de instrucción: secuencia ordenada de argumentos.

    La identidad es estructural: dos formatos con los mismos (tipo, slots) son el mismo,
    y su nombre canónico es la clave de deduplicación.
    """
    args: Tuple[Arg, ...] = ()

    def __post_init__(self):
        check_slots(self.all_slots())

    @property
    def is_empty(self) -> bool:
        return not self.args

    def all_slots(self) -> List[Slot]:
        return [s for a in self.args for s in a.slots]

    def operand_mask(self) -> int:
        return slots_mask(self.all_slots())

    def canonical_repr(self) -> str:
        if not self.args:
            return "EMPTY"
        return "".join(a.canonical_repr() for a in self.args)

    def slot_combination(self) -> str:
        """Letras de los offsets usados, ordenados por offset, p.ej. 'DJK'."""
        offsets = sorted(s.offset for s in self.all_slots())
        return "".join(slot_letter(o).upper() for o in offsets)

    def __str__(self) -> str:
        return self.canonical_repr()

# ---------------- Parseo del nombre canónico ----------------

_SLOT_LETTERS = "".join(SLOT_OFFSETS)
_ARG_RE = re.compile(
    r"(?P<gpr>[DJKA])(?![a-z])"
    r"|(?P<reg>[FC])(?P<regslot>[" + _SLOT_LETTERS + r"])(?!\d)"
    r"|(?P<imm>[SU])(?P<immslots>(?:[" + _SLOT_LETTERS + r"]\d+)+)"
)
_IMM_SLOT_RE = re.compile(r"([" + _SLOT_LETTERS + r"])(\d+)")

def _reg_arg(kind: ArgKind, letter: str) -> Arg:
    width = rule(kind).reg_width
    assert width is not None
    return Arg(kind, (Slot(slot_offset(letter), width),))

def parse_format(text: str) -> InsnFormat:
    """Convierte un nombre canónico ('DJSk12', 'FdFjFk', 'EMPTY') en InsnFormat.

    Lanza GenerationError si hay tipos o slots no reconocidos o solapados.
    """
    t = text.strip()
    if t == "EMPTY":
        return InsnFormat(())
    args: List[Arg] = []
    pos = 0
    while pos < len(t):
        m = _ARG_RE.match(t, pos)
        if not m:
            raise fail(f"Formato inválido: {text!r} (no se reconoce {t[pos:]!r})",
                       hint="tipos válidos: D/J/K/A, F<slot>, C<slot>, S<slots>, U<slots>")
        if m.group("gpr"):
            args.append(_reg_arg(ArgKind.INT_REG, m.group("gpr")))
        elif m.group("reg"):
            args.append(_reg_arg(_PREFIX_TO_KIND[m.group("reg")], m.group("regslot")))
        else:
            kind = _PREFIX_TO_KIND[m.group("imm")]
            slots = tuple(Slot(slot_offset(l), int(w)) for l, w in _IMM_SLOT_RE.findall(m.group("immslots")))
            args.append(Arg(kind, slots))
        pos = m.end()
    if not args:
        raise fail(f"Formato vacío: {text!r}", hint="use EMPTY para instrucciones sin operandos")
    return InsnFormat(tuple(args))
