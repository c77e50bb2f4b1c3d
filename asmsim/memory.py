"""Main memory and construction of the initial CPU state."""

from __future__ import annotations

from dataclasses import dataclass, field

from asmsim.registers import (
    U32_MAX,
    Flags,
    MainRegisters,
    OffsetRegisters,
    SegmentRegisters,
    check_u32,
)

MEMORY_MAX_SIZE = U32_MAX // 64
INITIAL_MAIN_REGISTERS = (10, 11, 14, 15)


class WorkMemory:
    """Word-addressed physical memory whose cells start at zero.

    Cells are stored sparsely, so only written cells take space.
    """

    def __init__(self, size: int = MEMORY_MAX_SIZE) -> None:
        self.size = size
        self._cells: dict[int, int] = {}

    def __len__(self) -> int:
        return self.size

    def _check_address(self, address: int) -> None:
        if not 0 <= address < self.size:
            raise IndexError(f"address {address:#x} outside memory of size {self.size:#x}")

    def write(self, address: int, value: int) -> None:
        """Store ``value`` at the physical ``address``."""
        self._check_address(address)
        check_u32(value)
        if value:
            self._cells[address] = value
        else:
            self._cells.pop(address, None)

    def read(self, address: int) -> int:
        """Return the value at the physical ``address``."""
        self._check_address(address)
        return self._cells.get(address, 0)


@dataclass(frozen=True)
class SegmentSummary:
    """A memory segment: its name, whether it is full, its base and its end."""

    name: str
    full: bool
    base: int
    end: int


@dataclass(frozen=True)
class ProcessLayout:
    """Where the code segment starts and how large each segment is."""

    code_base: int
    code_size: int
    stack_size: int
    data_size: int
    extra_size: int


@dataclass
class CpuState:
    """Memory, registers and flags of the simulated CPU."""

    memory: WorkMemory = field(default_factory=WorkMemory)
    main: MainRegisters = field(default_factory=MainRegisters)
    offsets: OffsetRegisters = field(default_factory=OffsetRegisters)
    segments: SegmentRegisters = field(default_factory=SegmentRegisters)
    flags: Flags = field(default_factory=Flags)


def _add_u32(a: int, b: int) -> int:
    total = a + b
    if total > U32_MAX:
        raise OverflowError(f"address {a:#x} + {b:#x} exceeds 32 bits")
    return total


def slice_segment_data(name: str, cursor: int, end: int, memory: WorkMemory) -> SegmentSummary:
    """Summarise the segment starting at ``cursor`` and ending at ``end``."""
    return SegmentSummary(name, end == memory.read(cursor), cursor, end)


def initiate_working_env(
    layout: ProcessLayout,
) -> tuple[tuple[SegmentSummary, SegmentSummary, SegmentSummary, SegmentSummary], CpuState]:
    """Lay the four segments out back to back and build the initial CPU state.

    Returns the code, stack, data and extra segment summaries and the state.
    """
    code_head = check_u32(layout.code_base)
    code_tail = _add_u32(code_head, layout.code_size)
    stack_head = _add_u32(code_tail, 1)
    stack_tail = _add_u32(stack_head, layout.stack_size)
    data_head = _add_u32(stack_tail, 1)
    data_tail = _add_u32(data_head, layout.data_size)
    extra_head = _add_u32(data_tail, 1)
    extra_tail = _add_u32(extra_head, layout.extra_size)

    state = CpuState()
    summaries = (
        slice_segment_data("CODE", code_head, code_tail, state.memory),
        slice_segment_data("STCK", stack_head, stack_tail, state.memory),
        slice_segment_data("DATA", data_head, data_tail, state.memory),
        slice_segment_data("EXTR", extra_head, extra_tail, state.memory),
    )

    for register, base in zip(("cs", "ss", "ds", "es"), (code_head, stack_head, data_head, extra_head)):
        state.segments.write(register, base)
    state.offsets.write("eip", state.segments.cs)
    state.offsets.write("esp", stack_tail)
    state.main.quick_start(INITIAL_MAIN_REGISTERS)
    state.flags.overflow_test()
    return summaries, state