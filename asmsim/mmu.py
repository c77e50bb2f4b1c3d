"""Memory management unit: segment bookkeeping, buses and address translation."""

from __future__ import annotations

from dataclasses import dataclass, field

from asmsim.memory import CpuState, ProcessLayout, SegmentSummary, initiate_working_env
from asmsim.registers import U32_MAX, Flags


def _null_segment() -> SegmentSummary:
    return SegmentSummary("null", False, 0, 0)


@dataclass
class MMU:
    """Holds the segment layout of the running process and the two buses."""

    code: SegmentSummary = field(default_factory=_null_segment)
    stack: SegmentSummary = field(default_factory=_null_segment)
    data: SegmentSummary = field(default_factory=_null_segment)
    extra: SegmentSummary = field(default_factory=_null_segment)
    data_bus: int = 0
    address_bus: int = 0

    def start_process_manager(self, layout: ProcessLayout) -> CpuState:
        """Set up segments for ``layout`` and return the fresh CPU state."""
        (self.code, self.stack, self.data, self.extra), state = initiate_working_env(layout)
        return state

    def physical_address(self, segment_register: str, offset: int, flags: Flags) -> int:
        """Translate ``offset`` within the cs, ss or ds segment to a physical address.

        Any other segment register yields 0. Limit violations are not reported:
        ``flags`` is left unchanged.
        """
        segments = {"cs": self.code, "ss": self.stack, "ds": self.data}
        segment = segments.get(segment_register)
        if segment is None:
            return 0
        return (segment.base + offset) & U32_MAX