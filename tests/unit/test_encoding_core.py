import pytest
from src.loong_insngen.encoding import SlotExpr, encode, encoder_for, plan_for
from src.loong_insngen.formats import parse_format
from src.loong_insngen.slots import join_fragments

def test_two_registers_scenario():
    # d en el offset 0 y j en el offset 5, ambos de 5 bits
    assert encode(0x10000000, parse_format("DJ"), [3, 7]) == 0x100000E3

def test_empty_format_passes_base_bits():
    assert encode(0x06483800, parse_format("EMPTY"), []) == 0x06483800

def test_add_w():
    # add.w $r4, $r5, $r6
    assert encode(0x00100000, parse_format("DJK"), [4, 5, 6]) == 0x001018A4

def test_signed_single_slot_is_masked():
    # addi.d $r4, $r5, -1
    assert encode(0x02C00000, parse_format("DJSk12"), [4, 5, -1]) == 0x02FFFCA4

def test_split_immediate_plan_and_value():
    fmt = parse_format("JSd5k16")
    plan = plan_for(fmt)
    # orden de la combinación de slots: D, J, K
    assert plan == (
        SlotExpr(offset=0, arg_index=1, shift=16, mask=0x1F),
        SlotExpr(offset=5, arg_index=0),
        SlotExpr(offset=10, arg_index=1, shift=0, mask=0xFFFF),
    )
    word = encode(0x40000000, fmt, [4, 0x155555])
    assert word & 0x1F == 0x15
    assert (word >> 10) & 0xFFFF == 0x5555
    assert (word >> 5) & 0x1F == 4
    assert join_fragments([word & 0x1F, (word >> 10) & 0xFFFF], fmt.args[1].slots) == 0x155555

def test_negative_branch_offset():
    # b -1 (en palabras): todos los bits del offset a uno
    assert encode(0x50000000, parse_format("Sd10k16"), [-1]) == 0x53FFFFFF

def test_kinds_share_combinator():
    assert encoder_for(parse_format("FdFjFk")).combination == encoder_for(parse_format("DJK")).combination
    assert encoder_for(parse_format("EMPTY")).combination is None

def test_slot_values_and_name():
    enc = encoder_for(parse_format("DJUm6Uk6"))
    assert enc.name == "encodeDJUm6Uk6"
    # orden D, J, K, M: k viene del segundo inmediato, m del primero
    assert enc.slot_values([1, 2, 3, 4]) == [1, 2, 4, 3]
    with pytest.raises(ValueError):
        enc.slot_values([1, 2, 3])
