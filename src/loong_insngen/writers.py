from __future__ import annotations
import sys
from typing import Optional, TextIO

def write_text(text: str, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)

def write_stream(text: str, stream: Optional[TextIO] = None) -> None:
    out = stream if stream is not None else sys.stdout
    out.write(text)
    out.flush()

def write_output(text: str, path: Optional[str] = None) -> None:
    """Vuelca el resultado completo: a 'path' si se indica, si no a stdout."""
    if path is None or path == "-":
        write_stream(text)
    else:
        write_text(text, path)
