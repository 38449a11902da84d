'''
dialecto de traducción dinámica (QEMU TCG): enum de opcodes, combinadores de slots,
codificador con asserts por formato y un emisor tcg_out_opc_* por instrucción
'''

from __future__ import annotations
from typing import List, Optional, Tuple

from .catalog import SlotCombination, combination_for
from .emitter import EmitterCtx, Formatter, Renderer
from .encoding import SlotExpr
from .formats import ArgKind, InsnFormat, rule
from .records import InsnRecord
from .tables import Model
from .validation import ArgCheck

ATTRIB_UNUSED = "__attribute__((unused))"
QEMU_ATTRIB = "qemu"

def tcg_opcode_name(mnemonic: str) -> str:
    """e.g. "amadd_db.w" -> "OPC_AMADD_DB_W" """
    return "OPC_" + mnemonic.replace(".", "_").upper()

def slot_encoder_fn_name(sc: SlotCombination) -> str:
    plural = "s" if len(sc.code) > 1 else ""
    return f"encode_{sc.letters}_slot{plural}"

def fmt_encoder_fn_name(fmt: InsnFormat) -> str:
    return f"encode_{fmt.canonical_repr().lower()}_insn"

def params_for(fmt: InsnFormat) -> List[Tuple[str, str]]:
    """(tipo C, nombre) de cada argumento."""
    return [(rule(a.kind).c_type, a.canonical_repr().lower()) for a in fmt.args]

def check_expr(c: ArgCheck) -> str:
    if c.kind is ArgKind.UNSIGNED_IMM:
        # uint32_t: el límite inferior sobra
        return f"{c.name} <= {c.hi:#x}"
    if c.lo < 0:
        return f"{c.name} >= -{-c.lo:#x} && {c.name} <= {c.hi:#x}"
    return f"{c.name} >= 0 && {c.name} <= {c.hi:#x}"

def slot_expr(e: SlotExpr, var: str) -> str:
    out = f"({var} >> {e.shift})" if e.shift > 0 else var
    if e.mask is not None:
        out += f" & {e.mask:#x}"
    return out

class TcgRenderer(Renderer):
    def __init__(self, formatter: Optional[Formatter] = None, *, commit: str = "unknown"):
        super().__init__(formatter)
        self.commit = commit

    def wants(self, record: InsnRecord) -> bool:
        # sólo las instrucciones que TCG emite llevan @qemu
        return record.has_attrib(QEMU_ATTRIB)

    def opcode_name(self, mnemonic: str) -> str:
        return tcg_opcode_name(mnemonic)

    def emit_model(self, ectx: EmitterCtx, model: Model) -> None:
        ectx.emit("/* SPDX-License-Identifier: MIT */\n")
        ectx.emit("/*\n")
        ectx.emit(" * LoongArch instruction formats, opcodes, and encoders for TCG use.\n")
        ectx.emit(" *\n")
        ectx.emit(" * This file is auto-generated by loong-insngen,\n")
        ectx.emit(f" * from commit {self.commit}.\n")
        ectx.emit(" * DO NOT EDIT.\n")
        ectx.emit(" */\n")

        self.emit_opc_enum(ectx, model)
        for sc in model.catalog.combinations:
            self.emit_slot_encoder(ectx, sc)
        for f in model.formats:
            self.emit_fmt_encoder(ectx, model, f)
        for r in model.records:
            self.emit_tcg_emitter(ectx, r)

        ectx.emit("\n/* End of generated code.  */\n")

    def emit_opc_enum(self, ectx: EmitterCtx, model: Model) -> None:
        ectx.emit("\ntypedef enum {\n")
        for r in model.records:
            entry = model.table[self.opcode_name(r.mnemonic)]
            ectx.emit(f"    {self.opcode_name(entry.mnemonic)} = {entry.bits:#010x},\n")
        ectx.emit("} LoongArchInsn;\n")

    def emit_slot_encoder(self, ectx: EmitterCtx, sc: SlotCombination) -> None:
        params = "".join(f", uint32_t {c}" for c in sc.letters)
        ectx.emit(f"\nstatic int32_t {ATTRIB_UNUSED}\n{slot_encoder_fn_name(sc)}(LoongArchInsn opc{params})\n{{\n")
        ectx.emit("    return opc")
        for c, off in zip(sc.letters, sc.offsets):
            ectx.emit(f" | {c} << {off}" if off > 0 else f" | {c}")
        ectx.emit(";\n}\n")

    def emit_fmt_encoder(self, ectx: EmitterCtx, model: Model, f: InsnFormat) -> None:
        # EMPTY no necesita codificador: se emite el opcode tal cual
        if f.is_empty:
            return
        params = "".join(f", {t} {n}" for t, n in params_for(f))
        ectx.emit(f"\nstatic int32_t {ATTRIB_UNUSED}\n{fmt_encoder_fn_name(f)}(LoongArchInsn opc{params})\n{{\n")
        for c in model.validator(f).checks:
            ectx.emit(f"    tcg_debug_assert({check_expr(c)});\n")

        names = [n for _, n in params_for(f)]
        exprs = "".join(", " + slot_expr(e, names[e.arg_index]) for e in model.encoder(f).plan)
        ectx.emit(f"    return {slot_encoder_fn_name(combination_for(f))}(opc{exprs});\n}}\n")

    def emit_tcg_emitter(self, ectx: EmitterCtx, r: InsnRecord) -> None:
        opc = self.opcode_name(r.mnemonic)
        params = params_for(r.format)

        ectx.emit(f"\n/* Emits the `{r.syntax()}` instruction.  */\n")
        ectx.emit(f"static void {ATTRIB_UNUSED}\ntcg_out_{opc.lower()}(TCGContext *s")
        for t, n in params:
            ectx.emit(f", {t} {n}")
        ectx.emit(")\n{\n")

        if r.format.is_empty:
            ectx.emit(f"    tcg_out32(s, {opc});\n}}\n")
            return

        args = "".join(f", {n}" for _, n in params)
        ectx.emit(f"    tcg_out32(s, {fmt_encoder_fn_name(r.format)}({opc}{args}));\n}}\n")
