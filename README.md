# simso

`simso` simulates a tiny computer and the operating system that runs on it.
It is meant for learning how an OS kernel handles interrupts, system calls,
blocked processes and scheduling, on hardware simple enough to read in one
sitting.

## The machine

`simso.machine.Machine` puts the hardware together:

- a main memory of 2000 integer words (`simso.memory.Memory`);
- a CPU with registers `pc`, `a` and `x`, a mode (`CpuMode.SUPERVISOR`,
  `USER` or `ZOMBIE`) and a pending error (`simso.cpu_state.CpuState`),
  executed one instruction at a time by `simso.executor.Executor`;
- an I/O controller (`simso.io.IOController`) with numbered devices;
- a screen model (`simso.screen.Screen`) with eight numeric terminals, a
  status line and a log console, drawn by `simso.view.CursesView`.

Devices registered by `Machine`:

| Number  | Device                                              |
|---------|-----------------------------------------------------|
| 0 – 6   | numeric terminals `a` – `g` (read and write)        |
| 10      | random number in `0..9` (read only)                 |
| 98      | CPU time used by the simulator, in ms (read only)   |
| 99      | instruction clock (read only)                       |
| 100 + i | 1 if device i is ready for reading, else 0          |
| 200 + i | 1 if device i is ready for writing, else 0          |

Reading a terminal with no number waiting, or writing to one whose output
queue (nine numbers) is full, fails with `Err.BUSY`. Errors are the
`simso.errors.Err` codes; `error_name` gives their display text.

The clock ticks after every instruction and each tick is passed to the
operating system as an interrupt.

## The operating system

`simso.kernel.OperatingSystem(machine, programs, scheduler)` starts program 0
as the first process, puts the CPU in user mode, and from then on is called
on every interrupt. Each process has its own copy of memory and registers,
swapped in and out of the machine on a context switch.

A program asks for a service with `SISOP n`, where `n` is a `SystemCall`:

| `n` | Call     | Meaning                                                     |
|-----|----------|-------------------------------------------------------------|
| 1   | `READ`   | read device `A`; value in `X`, error code in `A`            |
| 2   | `WRITE`  | write `X` to device `A`; error code in `A`                  |
| 3   | `EXIT`   | end the calling process                                     |
| 4   | `CREATE` | start a process running program number `A`; error in `A`   |

A process whose device is not ready is blocked and made ready again once it
is. When no process is ready the CPU idles in zombie mode. The system stops
when the process table is empty or on an unhandled interrupt.

Three schedulers are in `simso.schedulers` (quantum: 20 clock units):

- `SimpleScheduler` – keeps the running process until it stops, then takes
  the last ready one in the table;
- `RoundRobinScheduler` – preempts after a quantum and runs the process that
  has been ready the longest;
- `ShortestJobScheduler` – preempts after a quantum and runs the process with
  the smallest expected burst (`expected_time`).

When a process ends, its metrics are logged: time running, blocked and ready,
how many times it was blocked or preempted, and its total lifetime. On
shutdown the total clock, the time the CPU was busy and the number of
interrupts are logged.

## Installing

```
pip install .
```

The interactive screen uses the standard `curses` module, so it needs a
POSIX terminal; `--headless` works without it.

## Commands

### `simso`

```
simso [--scheduler {circular,curto,simples}] [--input TN ...] [--headless] PROGRAM [PROGRAM ...]
```

Loads the machine-code files given (program numbers follow their order; the
first is started), boots the operating system and runs it.

- `--scheduler` – `simples`, `circular` (the default) or `curto`, the three
  schedulers above in that order.
- `--input TN` – queue number `N` on terminal `T` before starting, e.g.
  `--input b30`; may be repeated.
- `--headless` – run without the interactive screen, then print the console
  log and the numbers left on each terminal's output.

The interactive screen starts paused. Type a command and press Enter:

| Command | Meaning                                         |
|---------|-------------------------------------------------|
| `etn`   | enter number `n` on terminal `t`, e.g. `eb30`   |
| `lt`    | take one number from terminal `t`'s output      |
| `zt`    | clear terminal `t`'s output                     |
| `p`     | pause execution                                 |
| `s`     | execute one step                                |
| `c`     | continue execution                              |

When the system stops, press Enter to leave.

In headless mode there is no way to type input after starting, so a program
that waits on an empty terminal keeps the machine idling forever.

### `simso-asm`

```
simso-asm program.asm
```

Assembles a source file and prints the resulting memory image, ten words per
line, in the format `simso` reads as a program. Non-fatal problems
(undefined or redefined symbols, unknown instructions, wrong argument
counts) are reported on standard error.

A source line is `[label] [instruction [argument]]`; a line that starts with
a blank has no label, and everything after `;` is a comment. Instructions:
`NOP`, `PARA`, `CARGI`, `CARGM`, `CARGX`, `ARMM`, `ARMX`, `MVAX`, `MVXA`,
`INCX`, `SOMA`, `SUB`, `MULT`, `DIV`, `RESTO`, `NEG`, `DESV`, `DESVZ`,
`DESVNZ`, `DESVN`, `DESVP`, `CHAMA`, `RET`, `LE`, `ESCR`, `SISOP`, and the
pseudo-instructions `VALOR n` (store a value), `ESPACO n` (reserve `n` zero
words) and `label DEFINE n` (give a symbol a value). `simso.instructions`
holds the `Opcode` table with `opcode_for`, `opcode_name` and `arg_count`.

## Using it from Python

Assemble a program:

```python
from simso.assembler import assemble

image = assemble("""
      CARGI 5
      ARMM  x
      PARA
x     VALOR 0
""")
# [2, 5, 5, 5, 1, 0]
```

`Assembler` gives line-by-line control, collects non-fatal messages in
`errors` and raises `AssemblyError` on fatal ones; `format()` renders the
image as `simso-asm` prints it.

Run instructions on bare hardware:

```python
from simso.memory import Memory
from simso.io import IOController
from simso.executor import Executor
from simso.errors import Err
from simso.instructions import Opcode

memory = Memory(2000)
cpu = Executor(memory, IOController())
memory.write(0, Opcode.CARGI)
memory.write(1, 42)
memory.write(2, Opcode.PARA)

while cpu.step() == Err.OK:
    pass

print(cpu.copy_state())   # a=42, error=Err.CPU_HALTED
```

Boot the whole system:

```python
from simso.kernel import OperatingSystem
from simso.machine import Machine
from simso.programs import load_program
from simso.schedulers import RoundRobinScheduler

machine = Machine()
system = OperatingSystem(machine, [load_program("init.maq")], RoundRobinScheduler())
machine.attach_os(system)
machine.run()
print(list(machine.screen.console))
```

Programs are read with `simso.programs.load_program(path)` or parsed from
text with `simso.programs.parse_maq(text)`: comma-separated integers, C
comments ignored. `simso.view.render(screen)` returns the screen as 24 text
rows of 80 columns.

## What it does not include

No programs come with the package: write them in assembly, assemble them with
`simso-asm`, and pass the resulting files to `simso`. Clock interrupts only
give the scheduler a chance to run; the operating system does nothing else
with them.

## Tests

```
pip install .[test]
pytest
```