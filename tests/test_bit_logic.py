import pytest

from asmsim.instructions.bit_logic import (
    bitwise_and,
    bitwise_not,
    bitwise_or,
    bitwise_xor,
)
from asmsim.memory import ProcessLayout
from asmsim.mmu import MMU


@pytest.fixture
def machine():
    mmu = MMU()
    state = mmu.start_process_manager(ProcessLayout(0x100, 0x20, 0x20, 0x20, 0x20))
    return state, mmu


@pytest.mark.parametrize("operation", [bitwise_and, bitwise_or])
def test_and_or_of_bus_value_with_itself_is_identity(machine, operation):
    state, mmu = machine
    mmu.data_bus = 0xDEADBEEF
    operation(state, mmu)
    assert state.main.eax == 0xDEADBEEF


def test_xor_of_bus_value_with_itself_is_zero(machine):
    state, mmu = machine
    mmu.data_bus = 0x1234
    bitwise_xor(state, mmu)
    assert state.main.eax == 0


def test_not_twice_restores_value(machine):
    state, mmu = machine
    mmu.data_bus = 0x0F0F1234
    bitwise_not(state, mmu)
    inverted = state.main.eax
    assert inverted != 0x0F0F1234
    mmu.data_bus = inverted
    bitwise_not(state, mmu)
    assert state.main.eax == 0x0F0F1234


def test_not_of_zero_sets_all_bits(machine):
    state, mmu = machine
    mmu.data_bus = 0
    bitwise_not(state, mmu)
    assert state.main.eax == 0xFFFFFFFF


@pytest.mark.parametrize(
    "operation", [bitwise_and, bitwise_or, bitwise_xor, bitwise_not]
)
def test_buses_are_cleared(machine, operation):
    state, mmu = machine
    mmu.data_bus = 0x55
    operation(state, mmu)
    assert (mmu.data_bus, mmu.address_bus) == (0, 0)


@pytest.mark.parametrize(
    ("operation", "advance"),
    [(bitwise_and, 6), (bitwise_or, 6), (bitwise_xor, 6), (bitwise_not, 4)],
)
def test_program_counter_advance(machine, operation, advance):
    state, mmu = machine
    start = state.offsets.eip
    operation(state, mmu)
    assert state.offsets.eip - start == advance


@pytest.mark.parametrize("operation", [bitwise_and, bitwise_or, bitwise_xor])
def test_binary_latches_operand_addresses(machine, operation):
    state, mmu = machine
    operation(state, mmu)
    assert state.offsets.esi == state.offsets.eip
    assert state.offsets.edi < state.offsets.esi


def test_not_latches_single_address(machine):
    state, mmu = machine
    bitwise_not(state, mmu)
    assert state.offsets.edi == state.offsets.esi == state.offsets.eip


def test_program_counter_overflow_raises(machine):
    state, mmu = machine
    state.offsets.write("eip", 0xFFFFFFFF)
    with pytest.raises(OverflowError):
        bitwise_and(state, mmu)