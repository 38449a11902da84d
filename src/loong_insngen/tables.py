'''
tabla por mnemónico: (bits base, formato canónico), y el modelo completo de una ejecución
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from .catalog import Catalog, build_catalog
from .diagnostics import Diagnostic, GenerationError, error
from .encoding import FormatEncoder, encoder_for
from .formats import InsnFormat
from .records import InsnRecord
from .validation import FormatValidator, validator_for

@dataclass(frozen=True)
class TableEntry:
    mnemonic: str
    bits: int
    format: InsnFormat

    @property
    def format_name(self) -> str:
        return self.format.canonical_repr()

def opcode_key(mnemonic: str) -> str:
    """Identificador estable por mnemónico: 'amadd_db.w' -> 'AMADD_DB_W'."""
    return mnemonic.replace(".", "_").upper()

def build_table(records: Sequence[InsnRecord],
                key: Callable[[str], str] = opcode_key) -> Dict[str, TableEntry]:
    """Una entrada por registro. Mnemónicos (o identificadores) repetidos abortan."""
    table: Dict[str, TableEntry] = {}
    owners: Dict[str, InsnRecord] = {}
    diags: List[Diagnostic] = []
    for r in records:
        k = key(r.mnemonic)
        prev = owners.get(k)
        if prev is not None:
            if prev.mnemonic == r.mnemonic:
                msg = f"Mnemónico duplicado: {r.mnemonic}"
            else:
                msg = f"{r.mnemonic} y {prev.mnemonic} colisionan en el identificador {k}"
            where = f"{prev.file}:{prev.line}" if prev.file is not None else None
            diags.append(error(msg, file=r.file, line=r.line,
                               hint=f"definido antes en {where}" if where else None))
            continue
        owners[k] = r
        table[k] = TableEntry(mnemonic=r.mnemonic, bits=r.word, format=r.format)
    if diags:
        raise GenerationError(diags)
    return table

@dataclass(frozen=True)
class Model:
    """Todo lo que consumen los renderizadores; se construye una vez por ejecución."""
    catalog: Catalog
    validators: Dict[str, FormatValidator]
    encoders: Dict[str, FormatEncoder]
    table: Dict[str, TableEntry]
    key: Callable[[str], str] = opcode_key

    @property
    def records(self) -> Tuple[InsnRecord, ...]:
        return self.catalog.records

    @property
    def formats(self) -> Tuple[InsnFormat, ...]:
        return self.catalog.formats

    def encoder(self, fmt: InsnFormat) -> FormatEncoder:
        return self.encoders[fmt.canonical_repr()]

    def validator(self, fmt: InsnFormat) -> FormatValidator:
        return self.validators[fmt.canonical_repr()]

    def encode(self, mnemonic: str, values: Sequence[int]) -> int:
        entry = self.table[self.key(mnemonic)]
        return self.encoder(entry.format).encode(entry.bits, values)

def build_model(records: Sequence[InsnRecord], *,
                key: Callable[[str], str] = opcode_key) -> Model:
    """catálogo -> combinaciones -> validadores/codificadores por formato -> tabla."""
    catalog = build_catalog(records)
    validators = {f.canonical_repr(): validator_for(f) for f in catalog.formats}
    encoders = {f.canonical_repr(): encoder_for(f) for f in catalog.formats}
    table = build_table(catalog.records, key=key)
    return Model(catalog=catalog, validators=validators, encoders=encoders, table=table, key=key)

def check_mnemonics(records: Sequence[InsnRecord]) -> None:
    """Unicidad de mnemónicos sobre toda la entrada, antes de que un dialecto filtre."""
    build_table(records, key=lambda m: m)
