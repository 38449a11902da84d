'''
clase Diagnostic, GenerationError y helpers (archivo/línea, severidad)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas, con ubicación opcional (archivo, línea y columna)
    y un mensaje de ayuda (pista) para orientar la corrección.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file)

class GenerationError(Exception):
    """Aborta la generación: entrada defectuosa o fallo de una herramienta externa.

    No hay salida parcial; quien la captura imprime los diagnósticos y termina.
    """

    def __init__(self, diagnostics: Diagnostic | Iterable[Diagnostic], *, tool_failure: bool = False):
        if isinstance(diagnostics, Diagnostic):
            diagnostics = [diagnostics]
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        self.tool_failure = tool_failure
        super().__init__("\n".join(str(d) for d in self.diagnostics))

def fail(message: str, *, hint: str | None = None, file: str | None = None,
         line: int | None = None) -> GenerationError:
    """Construye (no lanza) un GenerationError con un único error."""
    return GenerationError(error(message, line=line, file=file, hint=hint))
