import pytest
from src.loong_insngen.utils import (
    u32, mask, is_unsigned_nbit, is_signed_nbit, signed_range, unsigned_range,
    to_hex32, field_mask,
)

def test_u32_and_formats():
    assert u32(-1) == 0xFFFFFFFF
    assert to_hex32(0x1234, prefix=True) == "0x00001234"
    assert to_hex32(0xFFFFFFFF) == "0xffffffff"
    assert to_hex32(0xE3, prefix=False) == "000000e3"

def test_mask_and_field_mask():
    assert mask(5) == 0x1F
    assert mask(16) == 0xFFFF
    assert field_mask(10, 12) == 0x3FFC00
    with pytest.raises(ValueError):
        mask(0)

def test_ranges():
    assert signed_range(12) == (-2048, 2047)
    assert unsigned_range(12) == (0, 4095)
    assert signed_range(1) == (-1, 0)

def test_nbit_checks():
    assert is_unsigned_nbit(4095, 12)
    assert not is_unsigned_nbit(4096, 12)
    assert not is_unsigned_nbit(-1, 12)
    assert is_signed_nbit(2047, 12)
    assert is_signed_nbit(-2048, 12)
    assert not is_signed_nbit(2048, 12)
    assert not is_signed_nbit(-2049, 12)
