# asmsim

An interactive console simulator of a small x86-style CPU in segmented
mode. It lays out code, stack, data and extra segments back to back, sets
up the general, segment and offset registers, and steps through
instructions one at a time, printing the registers and the data and
address buses after each bus transfer.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
asmsim
```

The command takes no options besides `--help`. It reads its input from
standard input and first asks for:

1. the start address of the code segment (hexadecimal, `0x` prefix optional);
2. the sizes of the CODE, STACK, DATA and EXTRA segments (hexadecimal).

A value that cannot be read as an unsigned 32-bit hexadecimal number falls
back to a default: `0x0` for the start address and `0xFFFFF` for each
segment size. Each segment begins one address after the end of the one
before it.

It then prints a snapshot of the CPU and repeatedly asks for an
instruction line of the form

```
<address> <opcode> [operand1] [operand2]
```

The address is bare hexadecimal digits (it defaults to `0x1` if it cannot
be read) and is loaded into `eip`; the operands are hexadecimal with an
optional `0x` prefix and default to `0`. A line needs at least an address
and an opcode and may carry at most two operands.

Supported opcodes are `add`, `sub`, `inc`, `dec`, `mul`, `neg`, `and`,
`or`, `not`, `xor`, `mov`, `pop`, `push` and `xchg`. An unknown opcode does
nothing. After each instruction, answer `Y` to continue or anything else
to stop. The loop also stops if the overflow flag is set.

At the end the final CPU state is printed, followed by the first 20 rows
of the Global Descriptor Table, whose first four rows describe the code,
stack, data and extra segments.

If the layout or an instruction leads to an error (a malformed instruction
line, an address past 32 bits, an arithmetic result that does not fit in
32 bits), the message is printed to standard error and the command exits
with status 1.

## Library use

```python
from asmsim.memory import ProcessLayout
from asmsim.mmu import MMU
from asmsim.alu import ALU

mmu = MMU()
state = mmu.start_process_manager(ProcessLayout(0x0, 0x100, 0x100, 0x100, 0x100))
ALU().execute_instruction(state, mmu, "add", 0x10, 0x20)
print(state.main.eax)  # 48
```

Modules:

- `asmsim.registers` – `MainRegisters`, `SegmentRegisters`, `OffsetRegisters`,
  `Flags` and `RegisterError`
- `asmsim.memory` – `WorkMemory`, `SegmentSummary`, `ProcessLayout`,
  `CpuState`, `slice_segment_data` and `initiate_working_env`
- `asmsim.mmu` – `MMU`: segment bookkeeping, the two buses and
  `physical_address`
- `asmsim.descriptor_tables` – `DescriptorTable`, `DescriptorEntry`,
  `AccessLevel`, `generate_gdt`, `generate_idt`, `generate_ldt` and
  `get_response`
- `asmsim.report` – `describe_cpu_state` and `describe_working_states`
- `asmsim.instructions.arithmetic` – `add`, `sub`, `inc`, `dec`, `mul`, `neg`
- `asmsim.instructions.bit_logic` – `bitwise_and`, `bitwise_or`,
  `bitwise_not`, `bitwise_xor`
- `asmsim.instructions.moves` – `mov`, `pop`, `push`, `xchg`
- `asmsim.alu` – `ALU`, which dispatches by mnemonic
- `asmsim.cli` – `parse_hex` and the `main` entry point of the command

## What it does not do

- Instructions move values over the buses and registers only; they never
  read from or write to `WorkMemory`. Only `add` uses the operands typed on
  the instruction line; the other instructions take their operand values
  from whatever is on the MMU data bus, which every instruction clears to 0
  when it finishes.
- The bitwise instructions do not translate addresses through the MMU and
  print no steps.
- Segment limits are not enforced: `MMU.physical_address` never sets the
  overflow flag, so no general protection fault is ever raised, and the
  flags (overflow, zero, negative) stay as they were set up.
- There are no jumps, calls, compares or returns, and no way to load a
  program from a file.