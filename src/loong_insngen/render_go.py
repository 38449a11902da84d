'''
dialecto del ensamblador (backend Go cmd/internal/obj): formatos, validadores,
combinadores de slots, tabla de codificaciones y el codificador por formato
'''

from __future__ import annotations
from typing import List, Sequence

from .catalog import SlotCombination, combination_for
from .diagnostics import fail
from .emitter import EmitterCtx, Renderer
from .encoding import SlotExpr
from .formats import Arg, InsnFormat, rule
from .tables import Model, TableEntry

_REG_FIELD_BY_LETTER = {"d": "rd", "j": "rj", "k": "rk", "a": "ra"}

def go_opcode_name(mnemonic: str) -> str:
    """e.g. slli.w => ASLLIW"""
    return "A" + mnemonic.replace(".", "").replace("_", "").upper()

def format_const(fmt: InsnFormat) -> str:
    return "insnFormat" + fmt.canonical_repr()

def slot_encoder_fn_name(sc: SlotCombination) -> str:
    plural = "s" if len(sc.code) > 1 else ""
    return f"encode{sc.code}Slot{plural}"

def field_names(args: Sequence[Arg]) -> List[str]:
    """Campo de 'instruction' de cada argumento: rd/rj/rk/ra para registros, imm1, imm2... para inmediatos."""
    names = []
    imm_idx = 0
    for a in args:
        if a.is_imm:
            imm_idx += 1
            names.append(f"imm{imm_idx}")
            continue
        letter = a.slots[0].letter
        if letter not in _REG_FIELD_BY_LETTER:
            raise fail(f"Registro en el slot '{letter}' sin campo en el backend Go")
        names.append(_REG_FIELD_BY_LETTER[letter])
    return names

def slot_expr(e: SlotExpr, var: str) -> str:
    out = var
    if e.shift > 0:
        out += f">>{e.shift}"
    if e.mask is not None:
        out += f"&{e.mask:#x}"
    return out

class GoRenderer(Renderer):
    def opcode_name(self, mnemonic: str) -> str:
        return go_opcode_name(mnemonic)

    def emit_model(self, ectx: EmitterCtx, model: Model) -> None:
        ectx.emit("// Code generated by loong-insngen; DO NOT EDIT.\n\n")
        ectx.emit("package loong\n\n")
        ectx.emit("import \"cmd/internal/obj\"\n\n")

        self.emit_format_types(ectx, model.formats)
        for f in model.formats:
            self.emit_validator(ectx, model, f)
        for sc in model.catalog.combinations:
            self.emit_slot_encoder(ectx, sc)
        self.emit_encodings(ectx, [model.table[self.opcode_name(r.mnemonic)] for r in model.records])
        self.emit_big_encoder(ectx, model)

    def emit_format_types(self, ectx: EmitterCtx, fmts: Sequence[InsnFormat]) -> None:
        ectx.emit("type insnFormat int\n\nconst (\n")
        ectx.emit("\tinsnFormatUnknown insnFormat = iota\n")
        for f in fmts:
            ectx.emit(f"\t{format_const(f)}\n")
        ectx.emit(")\n\n")

    def emit_validator(self, ectx: EmitterCtx, model: Model, f: InsnFormat) -> None:
        v = model.validator(f)
        fields = field_names(f.args)

        # for every arg X:
        #     if err := want<kind>(insn.as, insn.X[, width]); err != nil {
        #         return err
        #     }
        ectx.emit(f"func {v.name}(insn *instruction) error {{\n")
        for c in v.checks:
            want = rule(c.kind).go_want_fn
            call = f"{want}(insn.as, insn.{fields[c.index]}"
            if rule(c.kind).is_imm:
                call += f", {c.width}"
            ectx.emit(f"\tif err := {call}); err != nil {{\n\t\treturn err\n\t}}\n")
        ectx.emit("\treturn nil\n}\n\n")

    def emit_slot_encoder(self, ectx: EmitterCtx, sc: SlotCombination) -> None:
        params = "".join(f", {c} uint32" for c in sc.letters)
        ectx.emit(f"func {slot_encoder_fn_name(sc)}(bits uint32{params}) uint32 {{\n")
        ectx.emit("\treturn bits")
        for c, off in zip(sc.letters, sc.offsets):
            ectx.emit(f" | {c}<<{off}" if off > 0 else f" | {c}")
        ectx.emit("\n}\n\n")

    def emit_encodings(self, ectx: EmitterCtx, entries: Sequence[TableEntry]) -> None:
        ectx.emit("type encoding struct {\n\tbits uint32\n\tfmt  insnFormat\n}\n\n")
        ectx.emit("var encodings = [ALAST & obj.AMask]encoding{\n")
        for e in entries:
            ectx.emit(f"\t{self.opcode_name(e.mnemonic)} & obj.AMask: "
                      f"{{bits: {e.bits:#010x}, fmt: {format_const(e.format)}}},\n")
        ectx.emit("}\n\n")

    def emit_big_encoder(self, ectx: EmitterCtx, model: Model) -> None:
        ectx.emit("func (insn *instruction) encode() (uint32, error) {\n"
                  "\tenc, err := encodingForAs(insn.as)\n"
                  "\tif enc == nil {\n"
                  "\t\treturn 0, err\n"
                  "\t}\n\n"
                  "\tswitch enc.fmt {\n")
        for f in model.formats:
            ectx.emit(f"\tcase {format_const(f)}:\n")
            if f.is_empty:
                ectx.emit("\t\treturn enc.bits, nil\n")
                continue

            fields = field_names(f.args)
            var_names = [a.canonical_repr().lower() for a in f.args]
            for a, var, field in zip(f.args, var_names, fields):
                conv = rule(a.kind).go_reg_fn or "uint32"
                ectx.emit(f"\t\t{var} := {conv}(insn.{field})\n")

            enc = model.encoder(f)
            sc = combination_for(f)
            exprs = "".join(", " + slot_expr(e, var_names[e.arg_index]) for e in enc.plan)
            ectx.emit(f"\t\treturn {slot_encoder_fn_name(sc)}(enc.bits{exprs}), nil\n")

        ectx.emit("\tdefault:\n\t\tpanic(\"should never happen: unknown insn format\")\n")
        ectx.emit("\t}\n}\n")
