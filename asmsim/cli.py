"""Interactive command line front end for the simulator."""

from __future__ import annotations

import argparse
import re
import sys

from asmsim.alu import ALU
from asmsim.descriptor_tables import AccessLevel, DescriptorEntry, generate_gdt, get_response
from asmsim.memory import CpuState, ProcessLayout
from asmsim.mmu import MMU
from asmsim.registers import U32_MAX
from asmsim.report import BLUE, BOLD, CYAN, GREEN, RED, RESET, YELLOW, describe_cpu_state

DEFAULT_CODE_BASE = 0x0
DEFAULT_SEGMENT_SIZE = 0xFFFFF
DEFAULT_INSTRUCTION_ADDRESS = 0x0001
DEFAULT_OPERAND = 0x0
MAX_OPERANDS = 2
GDT_ROWS_SHOWN = 20
SEGMENT_LABELS = ("CODE", "STACK", "DATA", "EXTRA")

_HEX_DIGITS = re.compile(r"\+?[0-9A-Fa-f]+")


def _parse_hex_digits(text: str, default: int) -> int:
    """Parse bare hexadecimal digits as an unsigned 32-bit value, else ``default``."""
    if not _HEX_DIGITS.fullmatch(text):
        return default
    value = int(text, 16)
    return value if value <= U32_MAX else default


def parse_hex(text: str, default: int) -> int:
    """Parse a hexadecimal value with an optional 0x/0X prefix.

    Surrounding whitespace is ignored. Anything that is not a valid unsigned
    32-bit hexadecimal number yields ``default``.
    """
    digits = text.strip()
    while digits.startswith("0x"):
        digits = digits[2:]
    while digits.startswith("0X"):
        digits = digits[2:]
    return _parse_hex_digits(digits, default)


def _parse_instruction(line: str) -> tuple[int, str, int, int]:
    """Split ``ADDRESS OPCODE [OP1 [OP2]]`` into its parts."""
    fields = line.split()
    if len(fields) < 2:
        raise ValueError("an instruction needs an address and an opcode")
    address, opcode, *operand_texts = fields
    if len(operand_texts) > MAX_OPERANDS:
        raise ValueError(f"an instruction takes at most {MAX_OPERANDS} operands")
    operands = [parse_hex(text, DEFAULT_OPERAND) for text in operand_texts]
    operands += [DEFAULT_OPERAND] * (MAX_OPERANDS - len(operands))
    return _parse_hex_digits(address, DEFAULT_INSTRUCTION_ADDRESS), opcode, operands[0], operands[1]


def _heading(text: str) -> str:
    return f"{BOLD}{CYAN}{text}{RESET}"


def _read_layout() -> ProcessLayout:
    print("Olá! Preencha o formulário abaixo:")
    print("ENDEREÇO INICIAL DO SEGMENTO DE CÓDIGO:")
    code_base = parse_hex(get_response(), DEFAULT_CODE_BASE)
    print("INDIQUE O TAMANHO DOS SEGMENTOS: ")
    sizes = []
    for label in SEGMENT_LABELS:
        print(f"{label} -> ")
        sizes.append(parse_hex(get_response(), DEFAULT_SEGMENT_SIZE))
    return ProcessLayout(code_base, *sizes)


def _run_instructions(state: CpuState, mmu: MMU) -> None:
    while True:
        print("QUAL A INSTRUÇÃO A SER EXECUTADA?")
        address, opcode, operand1, operand2 = _parse_instruction(get_response())
        state.offsets.write("eip", address)
        ALU().execute_instruction(state, mmu, opcode, operand1, operand2)
        print("Continue? (Y) for yes and (N) for No")
        keep_going = get_response().strip() == "Y"
        if state.flags.overflow or not keep_going:
            break


def _print_gdt(mmu: MMU) -> None:
    table = generate_gdt()
    for index, segment in enumerate((mmu.code, mmu.stack, mmu.data, mmu.extra)):
        table.content[index] = DescriptorEntry(segment.name, segment.base, segment.end, AccessLevel.USER)

    print(_heading("--------------------------- GLOBAL DESCRIPTOR TABLE ----------------------------"))
    for entry in table.content[:GDT_ROWS_SHOWN]:
        print(
            f"SELECTOR: {RED}{entry.selector}{RESET}"
            f" | BASE-ADRR: {BLUE}{entry.base:#x}{RESET}"
            f" | LIMIT-ADRR: {YELLOW}{entry.limit:#x}{RESET}"
            f" | ACESS-LEVEL: {GREEN}{entry.access_level.name}{RESET}"
        )
    print(_heading("-------------------------------- END OF TABLE ----------------------------------"))


def main(argv: list[str] | None = None) -> int:
    """Run the interactive simulator on standard input; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="asmsim",
        description="Simulate a segmented CPU executing instructions typed at the prompt.",
    )
    parser.parse_args(argv)

    print(f"{CYAN} ------ ASM SIMULATOR ------- {RESET}")
    layout = _read_layout()
    mmu = MMU()
    try:
        state = mmu.start_process_manager(layout)
        describe_cpu_state(state, mmu)
        _run_instructions(state, mmu)
    except (ValueError, OverflowError, IndexError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    describe_cpu_state(state, mmu)
    _print_gdt(mmu)
    return 0


if __name__ == "__main__":
    sys.exit(main())