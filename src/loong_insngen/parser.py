# src/loong_insngen/parser.py
from __future__ import annotations
import re
from typing import Dict, List, Optional, Sequence, Tuple

from .lexer import strip_comment, is_word, split_fields, split_attrib
from .records import InsnRecord
from .formats import parse_format
from .diagnostics import error, Diagnostic, GenerationError

MNEMONIC_RE = re.compile(r"^[a-z][a-z0-9_.]*$")
ATTRIB_RE   = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[InsnRecord], List[Diagnostic]]:
    """
    Devuelve (records, diagnostics) a partir del texto de un fichero de descripción.

    Reglas:
      - Comentarios: '#' hasta fin de línea; líneas vacías se ignoran.
      - Cada línea: '<palabra hex de 8 dígitos> <mnemónico> <formato> [@attr | @attr=valor]...'
      - El formato es un nombre canónico (DJK, DJSk12, FdFjFk, EMPTY, ...).
    Los errores se acumulan por línea; la línea defectuosa no produce registro.
    """
    records: List[InsnRecord] = []
    diags: List[Diagnostic] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        core = strip_comment(raw)
        if not core:
            continue

        fields, attrib_toks = split_fields(core)
        if len(fields) != 3:
            diags.append(error(f"Se esperaban 3 campos (palabra, mnemónico, formato), hay {len(fields)}",
                               line=lineno, file=filename))
            continue
        word_tok, mnemonic, fmt_tok = fields

        if not is_word(word_tok):
            diags.append(error(f"Palabra de opcode inválida: '{word_tok}'", line=lineno, file=filename,
                               hint="8 dígitos hexadecimales sin prefijo"))
            continue
        if not MNEMONIC_RE.match(mnemonic):
            diags.append(error(f"Mnemónico inválido: '{mnemonic}'", line=lineno, file=filename))
            continue

        attribs: Dict[str, Optional[str]] = {}
        bad_attrib = False
        for tok in attrib_toks:
            name, value = split_attrib(tok)
            if not tok.startswith("@") or not ATTRIB_RE.match(name):
                diags.append(error(f"Atributo inválido: '{tok}'", line=lineno, file=filename))
                bad_attrib = True
                continue
            attribs[name] = value
        if bad_attrib:
            continue

        try:
            fmt = parse_format(fmt_tok)
            records.append(InsnRecord(mnemonic=mnemonic, word=int(word_tok, 16), format=fmt,
                                      attribs=attribs, file=filename, line=lineno))
        except GenerationError as ex:
            for d in ex.diagnostics:
                diags.append(error(d.message, line=lineno, file=filename, hint=d.hint))

    return records, diags

def read_files(paths: Sequence[str]) -> List[InsnRecord]:
    """Lee y parsea varios ficheros en orden; cualquier error aborta sin resultado parcial."""
    records: List[InsnRecord] = []
    diags: List[Diagnostic] = []
    for path in paths:
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as ex:
            raise GenerationError(error(f"no pude leer {path}: {ex}"), tool_failure=True) from ex
        recs, ds = parse(text, filename=path)
        records.extend(recs)
        diags.extend(ds)
    if diags:
        raise GenerationError(diags)
    return records
