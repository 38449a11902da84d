import pytest
from src.loong_insngen.diagnostics import GenerationError
from src.loong_insngen.slots import (
    Slot, check_slots, slot_offset, slot_letter, slots_mask, fragments, split_value, join_fragments,
)

def test_slot_letters_and_offsets():
    assert [slot_offset(c) for c in "djkam"] == [0, 5, 10, 15, 16]
    assert slot_offset("K") == 10
    assert slot_letter(15) == "a"
    assert Slot(10, 12).canonical_repr() == "k12"
    with pytest.raises(GenerationError):
        slot_offset("x")
    with pytest.raises(GenerationError):
        slot_letter(3)

def test_disjoint_slots_accepted():
    check_slots([Slot(0, 5), Slot(5, 5), Slot(10, 12)])
    check_slots([])
    assert slots_mask([Slot(0, 5), Slot(5, 5)]) == 0x3FF

@pytest.mark.parametrize("slots", [
    [Slot(0, 6), Slot(5, 5)],              # d6 y j5 solapan en el bit 5
    [Slot(3, 5)],                          # offset sin letra
    [Slot(10, 16), Slot(16, 6)],           # k16 y m6
    [Slot(16, 17)],                        # se sale de la palabra
    [Slot(0, 0)],
])
def test_bad_slots_abort(slots):
    with pytest.raises(GenerationError):
        check_slots(slots)

def test_fragments_msb_first():
    fr = fragments([Slot(0, 5), Slot(10, 16)])
    assert [(f.offset, f.shift, f.mask) for f in fr] == [(0, 16, 0x1F), (10, 0, 0xFFFF)]

def test_split_21_bits_round_trip():
    slots = [Slot(0, 5), Slot(10, 16)]
    v = 0x155555
    high, low = split_value(v, slots)
    assert high == 0x15
    assert low == 0x5555
    assert (high << 16) | low == v & 0x1FFFFF
    assert join_fragments((high, low), slots) == v & 0x1FFFFF

def test_split_negative_value_is_twos_complement():
    slots = [Slot(0, 10), Slot(10, 16)]
    parts = split_value(-4, slots)
    assert parts == (0x3FF, 0xFFFC)
    assert join_fragments(parts, slots) == (-4) & 0x3FFFFFF

def test_single_slot_fragment():
    (f,) = fragments([Slot(5, 5)])
    assert f.shift == 0 and f.extract(0x3F) == 0x1F
