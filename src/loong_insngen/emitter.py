from __future__ import annotations
import io
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

# Formateador externo: recibe el texto generado y devuelve el formateado
Formatter = Callable[[str], str]

class EmitterCtx:
    """Buffer de salida con un único dueño (el renderizador activo)."""

    def __init__(self):
        self._buf = io.StringIO()
        self._closed = False

    def emit(self, fmt: str, *args) -> None:
        if self._closed:
            raise ValueError("emisión sobre un buffer ya finalizado")
        self._buf.write(fmt % args if args else fmt)

    def getvalue(self) -> str:
        return self._buf.getvalue()

    def close(self) -> None:
        self._closed = True
        self._buf.close()

@contextmanager
def emitter() -> Iterator[EmitterCtx]:
    """Entrega un EmitterCtx y lo cierra en cualquier salida (también si falla)."""
    ctx = EmitterCtx()
    try:
        yield ctx
    finally:
        ctx.close()

def finalize(text: str, formatter: Optional[Formatter]) -> str:
    """Una única pasada del formateador externo; sin formateador el texto sale tal cual."""
    if formatter is None:
        return text
    return formatter(text)

class Renderer:
    """Capacidad común de los dialectos: filtrar registros, nombrar opcodes y volcar el modelo.

    Las subclases sólo deciden el texto; la lógica vive en el modelo.
    """
    def __init__(self, formatter: Optional[Formatter] = None):
        self.formatter = formatter

    def wants(self, record) -> bool:
        return True

    def opcode_name(self, mnemonic: str) -> str:
        raise NotImplementedError

    def emit_model(self, ectx: EmitterCtx, model) -> None:
        raise NotImplementedError

    def render(self, model) -> str:
        with emitter() as ectx:
            self.emit_model(ectx, model)
            text = ectx.getvalue()
        return finalize(text, self.formatter)
