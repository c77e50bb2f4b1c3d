"""Coloured terminal reports of the simulated CPU state."""

from __future__ import annotations

from asmsim.memory import CpuState, SegmentSummary, slice_segment_data
from asmsim.mmu import MMU

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
MAGENTA = "\x1b[35m"
CYAN = "\x1b[36m"
WHITE = "\x1b[37m"
BRIGHT_RED = "\x1b[91m"
BRIGHT_GREEN = "\x1b[92m"
BRIGHT_YELLOW = "\x1b[93m"
BRIGHT_BLUE = "\x1b[94m"
BRIGHT_MAGENTA = "\x1b[95m"
BRIGHT_CYAN = "\x1b[96m"
BRIGHT_WHITE = "\x1b[97m"

SEGMENT_NAMES = ("CODE", "STCK", "DATA", "EXTR")


def _heading(text: str) -> str:
    return f"{BOLD}{CYAN}{text}{RESET}"


def _status(summary: SegmentSummary) -> str:
    return "DOWN" if summary.full else "UP"


def _segment_line(summary: SegmentSummary) -> str:
    return (
        f" NAME: {RED}{summary.name}{RESET}"
        f" | STATUS: {BLUE}{_status(summary)}{RESET}"
        f" | PRIM: {YELLOW}{summary.base:#x}{RESET}"
        f" | BLOCK_END: {GREEN}{summary.end:#x}{RESET}"
    )


def describe_cpu_state(state: CpuState, mmu: MMU) -> str:
    """Print a snapshot of registers, segments and flags; return the printed text."""
    segments = state.segments
    main = state.main
    offsets = state.offsets
    flags = state.flags
    summaries = [
        slice_segment_data(name, segment.base, segment.end, state.memory)
        for name, segment in zip(SEGMENT_NAMES, (mmu.code, mmu.stack, mmu.data, mmu.extra))
    ]

    lines = [
        "BELLOW HERE GOES A SNAPSHOT THE STATE OF THE CPU:",
        _heading("WHAT GOES BELLOW IS THE STATE OF THE MAIN REGISTERS:"),
        _heading("MAIN REGISTERS: "),
        f" {CYAN}EAX:{RESET} {RED}{main.eax}{RESET}",
        f" {CYAN}EBX:{RESET} {BLUE}{main.ebx}{RESET}",
        f" {CYAN}ECX:{RESET} {YELLOW}{main.ecx}{RESET}",
        f" {CYAN}EDX:{RESET} {GREEN}{main.edx}{RESET}",
        _heading("SEGMENTS SELECTED: "),
        *(_segment_line(summary) for summary in summaries),
        f"{CYAN} PROGRAM-COUNTER-STATE:{RESET} {MAGENTA}{offsets.eip:#x}{RESET}",
        f"{CYAN} STACK-POINTER-STATE:{RESET} {MAGENTA}{offsets.esp:#x}{RESET}",
        _heading("FLAGS: "),
        f"{CYAN} OVERFLOW? - {RESET} {BRIGHT_WHITE}{str(flags.overflow).lower()}{RESET}",
        f"{CYAN} ZERO? - {RESET} {BRIGHT_WHITE}{str(flags.zero).lower()}{RESET}",
        f"{CYAN} NEGATIVE? - {RESET} {BRIGHT_WHITE}{str(flags.negative).lower()}{RESET}",
        f"{BOLD}{BRIGHT_CYAN}ANALYSES COMPLETED! CODE -- {RESET}{WHITE}"
        f"{segments.cs:#x}:{segments.ss:#x}:{segments.ds:#x}:{segments.es:#x}{RESET}",
    ]
    text = "\n".join(lines)
    print(text)
    return text


def describe_working_states(
    state: CpuState, mmu: MMU, data_or_address: bool, get_or_send: bool
) -> bool:
    """Print the bus transfer and register state of one step.

    ``data_or_address`` picks the data bus (True) or the address bus (False);
    ``get_or_send`` picks a read (True) or a write (False). Returns True when a
    general protection fault (overflow flag) is pending.
    """
    main = state.main
    offsets = state.offsets
    segments = state.segments
    gpf = state.flags.overflow

    verb, direction = ("GOT", "FROM") if get_or_send else ("SENT", "TO")
    if data_or_address:
        transfer = f"{verb} {WHITE}{mmu.data_bus}{RESET} {direction} DATA BUS"
    else:
        transfer = f"{verb} {WHITE}{mmu.address_bus:#x}{RESET} {direction} ADRESS BUS"

    lines = [
        f"{CYAN}{'>' * 58} {RESET}",
        f"{CYAN} -- {transfer} -- {RESET}",
        f"{CYAN}EAX: {BRIGHT_RED}{main.eax}{RESET} | EBX: {BRIGHT_BLUE}{main.ebx}{RESET}"
        f" | ECX: {BRIGHT_YELLOW}{main.ecx}{RESET} | EDX: {BRIGHT_GREEN}{main.edx}{RESET}  {RESET}",
        f"{CYAN}CS: {BRIGHT_RED}{segments.cs:#x}{RESET} | SS: {BRIGHT_BLUE}{segments.ss:#x}{RESET}"
        f" | DS: {BRIGHT_YELLOW}{segments.ds:#x}{RESET} | ES: {BRIGHT_GREEN}{segments.es:#x}{RESET}  {RESET}",
        f"{CYAN}PROGRAM-COUNTER: {MAGENTA}{offsets.eip:#x}{RESET}"
        f"| STACK-POINTER: {WHITE}{offsets.esp:#x}{RESET}"
        f" | BASE-POINTER:{WHITE}{offsets.ebp:#x}{RESET}{RESET}",
        f"{CYAN}GPF?:{BRIGHT_MAGENTA}{'YES' if gpf else 'NO'}{RESET}",
    ]
    if gpf:
        lines.append(f"{RED}-- THERE HAS BEEN A GPF!!! TERMINATING PROCESS IMEDIATELY")
    else:
        lines.append(f"{CYAN}--PROCEED AS USUAL--{RESET}")
    print("\n".join(lines))
    return gpf