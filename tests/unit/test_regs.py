import pytest
from src.loong_insngen.formats import ArgKind
from src.loong_insngen.regs import REG_CLASS_SIZE, RegisterContext, reg_name

def test_class_sizes():
    assert REG_CLASS_SIZE[ArgKind.INT_REG] == 32
    assert REG_CLASS_SIZE[ArgKind.FP_REG] == 32
    assert REG_CLASS_SIZE[ArgKind.FCC_REG] == 8

def test_default_context_is_class_wide():
    ctx = RegisterContext()
    assert ctx.is_member("add.w", ArgKind.INT_REG, 0)
    assert ctx.is_member("add.w", ArgKind.INT_REG, 31)
    assert not ctx.is_member("add.w", ArgKind.INT_REG, 32)
    assert not ctx.is_member("add.w", ArgKind.INT_REG, -1)
    assert ctx.is_member("bceqz", ArgKind.FCC_REG, 7)
    assert not ctx.is_member("bceqz", ArgKind.FCC_REG, 8)

def test_per_instruction_exception_table():
    ctx = RegisterContext({"amswap.w": {ArgKind.INT_REG: frozenset({0, 21})}})
    assert not ctx.is_member("amswap.w", ArgKind.INT_REG, 21)
    assert not ctx.is_member("amswap.w", ArgKind.INT_REG, 0)
    assert ctx.is_member("amswap.w", ArgKind.INT_REG, 1)
    # la excepción sólo afecta a esa instrucción y a esa clase
    assert ctx.is_member("add.w", ArgKind.INT_REG, 21)
    assert ctx.is_member("amswap.w", ArgKind.FP_REG, 21)

def test_invalid():
    with pytest.raises(ValueError):
        RegisterContext({"x": {ArgKind.SIGNED_IMM: frozenset({1})}})
    with pytest.raises(ValueError):
        RegisterContext().is_member("x", ArgKind.UNSIGNED_IMM, 0)

def test_reg_name():
    assert reg_name(ArgKind.INT_REG, 4) == "r4"
    assert reg_name(ArgKind.FP_REG, 3) == "f3"
    assert reg_name(ArgKind.FCC_REG, 1) == "fcc1"
