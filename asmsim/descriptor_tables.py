"""Descriptor tables (global, interrupt and local) and terminal input."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum

MAX_TABLE_SIZE = 0x2000
GDT_CODE_LIMIT = 0xFFFF


def get_response() -> str:
    """Read one line from standard input, newline included."""
    return sys.stdin.readline()


class AccessLevel(Enum):
    KERNEL = "KERNEL"
    SYSTEMCALL = "SYSTEMCALL"
    SHELL = "SHELL"
    USER = "USER"


@dataclass
class DescriptorEntry:
    """One segment descriptor."""

    selector: str = "NULL"
    base: int = 0
    limit: int = 0
    access_level: AccessLevel = AccessLevel.USER


@dataclass
class DescriptorTable:
    """A named table of ``MAX_TABLE_SIZE`` descriptors, all null at first."""

    name: str
    content: list[DescriptorEntry] = field(
        default_factory=lambda: [DescriptorEntry() for _ in range(MAX_TABLE_SIZE)]
    )
    capacity: int = 0


def generate_gdt() -> DescriptorTable:
    """Build the global descriptor table with a kernel code entry first."""
    table = DescriptorTable("GLOBAL_D_TABLE")
    table.content[0] = DescriptorEntry("CS", 0, GDT_CODE_LIMIT, AccessLevel.KERNEL)
    return table


def generate_idt() -> DescriptorTable:
    """Build an empty interrupt descriptor table."""
    return DescriptorTable("INTERRUPT_D_TABLE")


def generate_ldt() -> DescriptorTable:
    """Build an empty local descriptor table."""
    return DescriptorTable("LOCAL_D_TABLE")