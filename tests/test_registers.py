import pytest

from asmsim.registers import (
    U32_MAX,
    Flags,
    MainRegisters,
    OffsetRegisters,
    RegisterError,
    SegmentRegisters,
)


@pytest.mark.parametrize("name", ["eax", "ebx", "ecx", "edx"])
def test_main_register_round_trip(name):
    regs = MainRegisters()
    regs.write(name, 1234)
    assert regs.read(name) == 1234


def test_main_register_unknown_write_raises():
    regs = MainRegisters()
    with pytest.raises(RegisterError):
        regs.write("esp", 1)


def test_main_register_unknown_read_is_zero():
    regs = MainRegisters(eax=7)
    assert regs.read("bogus") == 0


def test_main_register_rejects_out_of_range():
    regs = MainRegisters()
    with pytest.raises(ValueError):
        regs.write("eax", U32_MAX + 1)
    with pytest.raises(ValueError):
        regs.write("eax", -1)


def test_quick_start_loads_in_order():
    regs = MainRegisters()
    regs.quick_start((10, 11, 14, 15))
    assert (regs.eax, regs.ebx, regs.ecx, regs.edx) == (10, 11, 14, 15)


@pytest.mark.parametrize("name", ["cs", "ss", "ds", "es", "fs", "gs"])
def test_segment_register_round_trip(name):
    regs = SegmentRegisters()
    regs.write(name, 0x100)
    assert regs.read(name) == 0x100


def test_segment_register_unknown_write_ignored():
    regs = SegmentRegisters()
    regs.write("xs", 5)
    assert regs == SegmentRegisters()
    assert regs.read("xs") == 0


@pytest.mark.parametrize("name", ["eip", "esp", "ebp", "edi", "esi"])
def test_offset_register_round_trip(name):
    regs = OffsetRegisters()
    regs.write(name, 99)
    assert regs.read(name) == 99


def test_offset_register_unknown_write_ignored():
    regs = OffsetRegisters()
    regs.write("eax", 5)
    assert regs == OffsetRegisters()


def test_increment_program_counter_steps_by_two():
    regs = OffsetRegisters(eip=40)
    regs.increment_program_counter()
    regs.increment_program_counter()
    assert regs.eip == 40 + 2 + 2


def test_increment_program_counter_overflow():
    regs = OffsetRegisters(eip=U32_MAX)
    with pytest.raises(OverflowError):
        regs.increment_program_counter()


def test_decrease_stack_pointer_steps_by_two():
    regs = OffsetRegisters(esp=50)
    regs.decrease_stack_pointer()
    assert regs.esp == 50 - 2


def test_decrease_stack_pointer_underflow():
    regs = OffsetRegisters(esp=1)
    with pytest.raises(OverflowError):
        regs.decrease_stack_pointer()


def test_flags_overflow_test():
    assert Flags().overflow_test() == 0
    assert Flags(overflow=True).overflow_test() == 1