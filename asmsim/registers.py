"""CPU register files and the flag register."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

U32_MAX = 0xFFFF_FFFF


class RegisterError(KeyError):
    """Raised when a write names a register that does not exist."""


def check_u32(value: int) -> int:
    """Return ``value`` if it fits in an unsigned 32-bit register."""
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"value {value!r} does not fit in 32 bits")
    return value


def _read(registers: Any, names: tuple[str, ...], register: str) -> int:
    """Read a named register; unknown names read as zero."""
    if register in names:
        return getattr(registers, register)
    return 0


def _write_if_known(registers: Any, names: tuple[str, ...], register: str, value: int) -> None:
    """Write a named register; unknown names are ignored."""
    if register in names:
        setattr(registers, register, check_u32(value))


@dataclass
class MainRegisters:
    """General purpose registers."""

    eax: int = 0
    ebx: int = 0
    ecx: int = 0
    edx: int = 0

    names: ClassVar[tuple[str, ...]] = ("eax", "ebx", "ecx", "edx")

    def read(self, register: str) -> int:
        """Return the register's value, or 0 for an unknown name."""
        return _read(self, self.names, register)

    def write(self, register: str, value: int) -> None:
        """Store ``value`` in the register; unknown names raise RegisterError."""
        if register not in self.names:
            raise RegisterError(f"no general purpose register named {register!r}")
        setattr(self, register, check_u32(value))

    def quick_start(self, values: tuple[int, int, int, int]) -> None:
        """Load eax, ebx, ecx and edx in that order."""
        for name, value in zip(self.names, values, strict=True):
            self.write(name, value)


@dataclass
class SegmentRegisters:
    """Segment selector registers; writes to unknown names are ignored."""

    cs: int = 0
    ss: int = 0
    ds: int = 0
    es: int = 0
    fs: int = 0
    gs: int = 0

    names: ClassVar[tuple[str, ...]] = ("cs", "ss", "ds", "es", "fs", "gs")

    def read(self, register: str) -> int:
        """Return the register's value, or 0 for an unknown name."""
        return _read(self, self.names, register)

    def write(self, register: str, value: int) -> None:
        """Store ``value`` in the register; unknown names are ignored."""
        _write_if_known(self, self.names, register, value)


@dataclass
class OffsetRegisters:
    """Pointer and index registers; writes to unknown names are ignored."""

    eip: int = 0
    esp: int = 0
    ebp: int = 0
    edi: int = 0
    esi: int = 0

    names: ClassVar[tuple[str, ...]] = ("eip", "esp", "ebp", "edi", "esi")

    def read(self, register: str) -> int:
        """Return the register's value, or 0 for an unknown name."""
        return _read(self, self.names, register)

    def write(self, register: str, value: int) -> None:
        """Store ``value`` in the register; unknown names are ignored."""
        _write_if_known(self, self.names, register, value)

    def increment_program_counter(self) -> None:
        """Advance eip by one two-byte step."""
        if self.eip + 2 > U32_MAX:
            raise OverflowError("program counter overflow")
        self.eip += 2

    def decrease_stack_pointer(self) -> None:
        """Move esp down by one two-byte step."""
        if self.esp < 2:
            raise OverflowError("stack pointer underflow")
        self.esp -= 2


@dataclass
class Flags:
    """Status flags."""

    overflow: bool = False
    zero: bool = False
    negative: bool = False

    def overflow_test(self) -> int:
        """Return 1 if the overflow flag is set, else 0."""
        return 1 if self.overflow else 0