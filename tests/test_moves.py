import pytest

from asmsim.instructions.moves import mov, pop, push, xchg
from asmsim.memory import ProcessLayout
from asmsim.mmu import MMU
from asmsim.registers import U32_MAX


@pytest.fixture
def machine():
    mmu = MMU()
    state = mmu.start_process_manager(ProcessLayout(0x100, 0x20, 0x20, 0x20, 0x20))
    return state, mmu


def test_mov_copies_bus_value_into_eax(machine):
    state, mmu = machine
    mmu.data_bus = 0x42
    mov(state, mmu)
    assert state.main.eax == 0x42
    assert state.offsets.edi == state.offsets.esi == 0x42


def test_mov_advances_program_counter(machine):
    state, mmu = machine
    start = state.offsets.eip
    mov(state, mmu)
    assert state.offsets.eip - start == 6


@pytest.mark.parametrize("operation", [mov, pop, push, xchg])
def test_buses_are_cleared(machine, operation):
    state, mmu = machine
    mmu.data_bus = 0x7
    operation(state, mmu)
    assert (mmu.data_bus, mmu.address_bus) == (0, 0)


@pytest.mark.parametrize("operation", [mov, pop, push, xchg])
def test_reports_are_printed(machine, operation, capsys):
    state, mmu = machine
    operation(state, mmu)
    out = capsys.readouterr().out
    assert "--PROCEED AS USUAL--" in out
    assert "ADRESS BUS" in out


def test_push_moves_stack_pointer_down(machine):
    state, mmu = machine
    mmu.data_bus = 0x99
    before = state.offsets.esp
    push(state, mmu)
    assert state.offsets.esp == before - 2
    assert state.main.eax == 0x99


def test_push_on_empty_stack_pointer_raises(machine):
    state, mmu = machine
    state.offsets.write("esp", 0)
    with pytest.raises(OverflowError):
        push(state, mmu)


def test_pop_loads_value_and_moves_stack_pointer(machine):
    state, mmu = machine
    mmu.data_bus = 0x31
    before = state.offsets.esp
    pop(state, mmu)
    assert state.main.eax == 0x31
    assert state.offsets.edi == 0x31
    assert state.offsets.esp == before - 2


def test_pop_with_zero_stack_pointer_raises(machine):
    state, mmu = machine
    state.offsets.write("esp", 0)
    with pytest.raises(OverflowError):
        pop(state, mmu)


def test_pop_with_top_beyond_32_bits_raises(machine):
    state, mmu = machine
    state.offsets.write("esp", U32_MAX - mmu.stack.base)
    with pytest.raises(OverflowError):
        pop(state, mmu)


def test_xchg_loads_both_operands(machine):
    state, mmu = machine
    mmu.data_bus = 0xAB
    xchg(state, mmu)
    assert state.main.eax == 0xAB
    assert state.main.ebx == 0xAB
    assert state.offsets.edi == state.offsets.esi == 0xAB


def test_xchg_and_mov_advance_the_same(machine):
    state, mmu = machine
    start = state.offsets.eip
    xchg(state, mmu)
    after_xchg = state.offsets.eip - start
    start = state.offsets.eip
    mov(state, mmu)
    assert state.offsets.eip - start == after_xchg


def test_moves_leave_flags_untouched(machine):
    state, mmu = machine
    for operation in (mov, push, pop, xchg):
        operation(state, mmu)
    assert state.flags.overflow_test() == 0