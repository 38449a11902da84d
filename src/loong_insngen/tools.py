'''
colaboradores externos: gofmt, clang-format (estilo QEMU) y el commit de git
'''

from __future__ import annotations
import os
import tempfile
from pathlib import Path
from subprocess import PIPE, run
from typing import List, Optional

from .diagnostics import GenerationError, error

QEMU_STYLE_FILE = Path(__file__).with_name("qemu.clang-format")

def _run_tool(cmd: List[str], text: str, *, cwd: Optional[str] = None) -> str:
    try:
        proc = run(cmd, input=text, stdout=PIPE, stderr=PIPE, cwd=cwd,
                   encoding="utf-8", check=False)
    except OSError as ex:
        raise GenerationError(error(f"no pude ejecutar {cmd[0]}: {ex}",
                                    hint=f"¿está {cmd[0]} instalado y en el PATH?"),
                              tool_failure=True) from ex
    if proc.returncode != 0:
        raise GenerationError(error(f"{cmd[0]} falló (código {proc.returncode})\nstderr:\n{proc.stderr}"),
                              tool_failure=True)
    return proc.stdout

def gofmt(text: str) -> str:
    return _run_tool(["gofmt"], text)

def clang_format_qemu(text: str) -> str:
    """clang-format con el estilo de QEMU.

    clang-format sólo busca el estilo en un fichero '.clang-format' de un directorio
    padre, así que se copia a un directorio temporal y se ejecuta allí.
    """
    style = QEMU_STYLE_FILE.read_text(encoding="utf-8")
    with tempfile.TemporaryDirectory(prefix="loong-insngen.") as tmp:
        Path(tmp, ".clang-format").write_text(style, encoding="utf-8")
        return _run_tool(["clang-format", "--style=file",
                          "--assume-filename=" + os.path.join(tmp, "tcg-insn-defs.c.inc")],
                         text, cwd=tmp)

def git_commit_hash(repo: Optional[str] = None) -> str:
    """Commit actual (HEAD) del repositorio de descripciones."""
    return _run_tool(["git", "rev-parse", "HEAD"], "", cwd=repo).strip()
