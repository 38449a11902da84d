import pytest
from src.loong_insngen.parser import parse, read_files
from src.loong_insngen.diagnostics import GenerationError
from src.loong_insngen.formats import ArgKind

SRC = """
# LoongArch, subconjunto mínimo
00100000 add.w DJK @qemu
02c00000 addi.d DJSk12 @qemu @orig_fmt=DJSk12
40000000 beqz JSd5k16
06483800 ertn EMPTY      # sin operandos
"""

def test_parse_program_min():
    records, diags = parse(SRC, filename="base.txt")
    assert not diags
    assert [r.mnemonic for r in records] == ["add.w", "addi.d", "beqz", "ertn"]
    addi = records[1]
    assert addi.word == 0x02C00000
    assert addi.format.canonical_repr() == "DJSk12"
    assert addi.attribs == {"qemu": None, "orig_fmt": "DJSk12"}
    assert addi.has_attrib("qemu") and not records[2].has_attrib("qemu")
    assert addi.file == "base.txt" and addi.line == 4
    assert records[3].format.is_empty
    assert records[2].format.args[1].kind is ArgKind.SIGNED_IMM

@pytest.mark.parametrize("line, fragment", [
    ("00100000 add.w", "3 campos"),
    ("0x100000 add.w DJK", "Palabra de opcode inválida"),
    ("00100000 ADD.W DJK", "Mnemónico inválido"),
    ("00100000 add.w DJK qemu", "3 campos"),
    ("00100000 add.w DJK @9x", "Atributo inválido"),
    ("00100000 add.w DJX", "Formato inválido"),
    ("00100000 add.w DD", "Slots solapados"),
    ("00100001 add.w DJK", "pisa los slots"),
])
def test_errors_by_line(line, fragment):
    records, diags = parse("# cabecera\n" + line + "\n", filename="bad.txt")
    assert records == []
    assert len(diags) == 1
    d = diags[0]
    assert d.severity == "error" and d.line == 2 and d.file == "bad.txt"
    assert fragment in d.message

def test_good_lines_survive_bad_ones():
    records, diags = parse("00100000 add.w DJK\nzzzz\n00110000 sub.w DJK\n")
    assert [r.mnemonic for r in records] == ["add.w", "sub.w"]
    assert len(diags) == 1 and diags[0].line == 2

def test_read_files_concatenates_in_order(tmp_path):
    a = tmp_path / "a.txt"; a.write_text("00110000 sub.w DJK\n", encoding="utf-8")
    b = tmp_path / "b.txt"; b.write_text("00100000 add.w DJK\n", encoding="utf-8")
    records = read_files([str(a), str(b)])
    assert [r.mnemonic for r in records] == ["sub.w", "add.w"]

def test_read_files_aborts_on_any_error(tmp_path):
    a = tmp_path / "a.txt"; a.write_text("00100000 add.w DJK\n", encoding="utf-8")
    b = tmp_path / "b.txt"; b.write_text("00100000 add.w DJQ\n", encoding="utf-8")
    with pytest.raises(GenerationError) as ei:
        read_files([str(a), str(b)])
    assert not ei.value.tool_failure
    assert ei.value.diagnostics[0].file == str(b)

def test_read_files_missing(tmp_path):
    with pytest.raises(GenerationError) as ei:
        read_files([str(tmp_path / "nope.txt")])
    assert ei.value.tool_failure
