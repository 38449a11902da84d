import os
import subprocess
import pytest

from src.loong_insngen import tools
from src.loong_insngen.diagnostics import GenerationError

def _fake_run(returncode=0, stdout="", stderr="", seen=None):
    def run(cmd, input=None, cwd=None, **kw):
        if seen is not None:
            seen.append({"cmd": cmd, "input": input, "cwd": cwd,
                         "style": os.path.exists(os.path.join(cwd, ".clang-format")) if cwd else False})
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)
    return run

def test_gofmt_passes_text_through_stdin(monkeypatch):
    seen = []
    monkeypatch.setattr(tools, "run", _fake_run(stdout="formatted\n", seen=seen))
    assert tools.gofmt("package loong\n") == "formatted\n"
    assert seen[0]["cmd"] == ["gofmt"] and seen[0]["input"] == "package loong\n"

def test_formatter_failure_surfaces_stderr(monkeypatch):
    monkeypatch.setattr(tools, "run", _fake_run(returncode=2, stderr="<standard input>:3:1: expected declaration"))
    with pytest.raises(GenerationError) as ei:
        tools.gofmt("garbage")
    assert ei.value.tool_failure
    msg = ei.value.diagnostics[0].message
    assert "gofmt falló (código 2)" in msg
    assert "<standard input>:3:1: expected declaration" in msg

def test_missing_tool(monkeypatch):
    def run(cmd, **kw):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])
    monkeypatch.setattr(tools, "run", run)
    with pytest.raises(GenerationError) as ei:
        tools.clang_format_qemu("int x;")
    assert ei.value.tool_failure
    assert "clang-format" in ei.value.diagnostics[0].message

def test_clang_format_runs_next_to_style_file(monkeypatch):
    seen = []
    monkeypatch.setattr(tools, "run", _fake_run(stdout="int x;\n", seen=seen))
    assert tools.clang_format_qemu("int  x;") == "int x;\n"
    call = seen[0]
    assert call["cmd"][:2] == ["clang-format", "--style=file"]
    assert call["style"]
    # el directorio temporal desaparece al terminar
    assert not os.path.exists(call["cwd"])

def test_style_file_is_shipped():
    assert tools.QEMU_STYLE_FILE.is_file()
    assert "BasedOnStyle" in tools.QEMU_STYLE_FILE.read_text(encoding="utf-8")

def test_git_commit_hash(monkeypatch):
    monkeypatch.setattr(tools, "run", _fake_run(stdout="deadbeef\n"))
    assert tools.git_commit_hash() == "deadbeef"
