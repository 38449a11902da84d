from __future__ import annotations
import argparse, os, sys
from typing import Optional, Sequence

from .diagnostics import GenerationError
from .emitter import Renderer
from .parser import read_files
from .records import InsnRecord
from .render_go import GoRenderer
from .render_tcg import TcgRenderer
from .tables import Model, build_model, check_mnemonics
from .tools import clang_format_qemu, git_commit_hash, gofmt
from .writers import write_output

def make_renderer(backend: str, *, formatted: bool = True, commit: Optional[str] = None,
                  repo: Optional[str] = None) -> Renderer:
    """'repo' es el repositorio de las descripciones; de ahí sale el commit si no se da."""
    if backend == "go":
        return GoRenderer(gofmt if formatted else None)
    if backend == "tcg":
        if commit is None:
            commit = git_commit_hash(repo)
        return TcgRenderer(clang_format_qemu if formatted else None, commit=commit)
    raise ValueError(f"backend desconocido: {backend}")

def model_for(records: Sequence[InsnRecord], renderer: Renderer) -> Model:
    """Filtra los registros que le interesan al dialecto y construye el modelo.

    Los mnemónicos se comprueban sobre toda la entrada: un duplicado aborta aunque
    el dialecto no vaya a emitirlo.
    """
    check_mnemonics(records)
    selected = [r for r in records if renderer.wants(r)]
    return build_model(selected, key=renderer.opcode_name)

def generate_text(records: Sequence[InsnRecord], renderer: Renderer) -> str:
    """registros -> catálogo -> combinaciones -> validadores/codificadores -> tabla -> texto.

    Cualquier defecto lanza GenerationError antes de devolver nada.
    """
    return renderer.render(model_for(records, renderer))

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="loong-insngen",
                                 description="Generador de codificadores LoongArch a partir de descripciones")
    ap.add_argument("backend", choices=("go", "tcg"),
                    help="go: backend del ensamblador Go; tcg: cabecera C para QEMU TCG")
    ap.add_argument("inputs", nargs="+", help="ficheros de descripción de instrucciones (.txt)")
    ap.add_argument("-o", "--output", default=None, help="fichero de salida (por defecto stdout)")
    ap.add_argument("--no-format", action="store_true", help="no pasar la salida por gofmt/clang-format")
    ap.add_argument("--commit", default=None, help="commit a citar en la cabecera TCG (por defecto git HEAD)")
    ap.add_argument("-v", "--verbose", action="store_true", help="resumen en stderr al terminar")
    args = ap.parse_args(argv)

    try:
        records = read_files(args.inputs)
        renderer = make_renderer(args.backend, formatted=not args.no_format, commit=args.commit,
                                 repo=os.path.dirname(os.path.abspath(args.inputs[0])))
        model = model_for(records, renderer)
        text = renderer.render(model)
    except GenerationError as ex:
        for d in ex.diagnostics:
            print(d, file=sys.stderr)
        return 2 if ex.tool_failure else 1

    try:
        write_output(text, args.output)
    except OSError as ex:
        print(f"ERROR al escribir salida: {ex}", file=sys.stderr)
        return 3

    if args.verbose:
        print(f"OK: {len(model.records)} instrucciones, {len(model.formats)} formatos, "
              f"{len(model.catalog.combinations)} combinaciones", file=sys.stderr)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
