import pytest

from asmsim.memory import ProcessLayout
from asmsim.mmu import MMU
from asmsim.registers import Flags

LAYOUT = ProcessLayout(0x100, 0x10, 0x20, 0x30, 0x40)


def test_new_mmu_defaults():
    mmu = MMU()
    for segment in (mmu.code, mmu.stack, mmu.data, mmu.extra):
        assert (segment.name, segment.full, segment.base, segment.end) == ("null", False, 0, 0)
    assert (mmu.data_bus, mmu.address_bus) == (0, 0)


def test_start_process_manager_records_segments():
    mmu = MMU()
    state = mmu.start_process_manager(LAYOUT)
    assert mmu.code.name == "CODE"
    assert mmu.stack.name == "STCK"
    assert mmu.data.name == "DATA"
    assert mmu.extra.name == "EXTR"
    assert state.segments.cs == mmu.code.base
    assert state.segments.ss == mmu.stack.base
    assert state.segments.ds == mmu.data.base
    assert state.segments.es == mmu.extra.base
    assert state.offsets.esp == mmu.stack.end


@pytest.mark.parametrize("register,attr", [("cs", "code"), ("ss", "stack"), ("ds", "data")])
def test_physical_address_adds_base(register, attr):
    mmu = MMU()
    mmu.start_process_manager(LAYOUT)
    base = getattr(mmu, attr).base
    assert mmu.physical_address(register, 6, Flags()) == base + 6


@pytest.mark.parametrize("register", ["es", "fs", "xx"])
def test_physical_address_other_registers_give_zero(register):
    mmu = MMU()
    mmu.start_process_manager(LAYOUT)
    assert mmu.physical_address(register, 6, Flags()) == 0


def test_physical_address_leaves_flags_untouched():
    mmu = MMU()
    mmu.start_process_manager(LAYOUT)
    flags = Flags()
    address = mmu.physical_address("cs", 0x1000, flags)
    assert address > mmu.code.end
    assert flags == Flags()


def test_physical_address_wraps_to_32_bits():
    mmu = MMU()
    mmu.start_process_manager(LAYOUT)
    assert mmu.physical_address("cs", 0xFFFF_FFFF, Flags()) == mmu.code.base - 1