"""In-process interpreter for the generated assembly.

Runs the x86-64 subset that the code generator emits, so compiled
expressions can be checked without an assembler or a linker. Registers
hold 64-bit two's-complement values; ``al`` aliases the low byte of
``rax``. The routine starts at its entry label and stops at ``ret``,
which must find the value stack empty.

Example:
    >>> machine = StackMachine()
    >>> machine.run(Environment().compile("5+6*7"))
    47
    >>> exit_status(machine.run(Environment().compile("-1")))
    255
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass, field

from exprcc.analysis.evaluate import to_signed
from exprcc.environment.exceptions import MachineError

_MASK = (1 << 64) - 1
_IMM32_MIN = -(1 << 31)
_IMM32_MAX = (1 << 31) - 1

REGISTERS: tuple[str, ...] = ("rax", "rdi", "rdx")

# setCC suffix -> signed comparison on the last cmp operands
CONDITIONS: dict[str, Callable[[int, int], bool]] = {
    "e": operator.eq,
    "ne": operator.ne,
    "l": operator.lt,
    "le": operator.le,
    "g": operator.gt,
    "ge": operator.ge,
}


def exit_status(value: int) -> int:
    """Low 8 bits of a return value, as a shell reports it."""
    return value & 0xFF


@dataclass(slots=True)
class Instruction:
    """One parsed line of assembly."""

    lineno: int
    text: str
    mnemonic: str
    operands: tuple[str, ...] = ()


@dataclass(slots=True)
class MachineState:
    """Registers, value stack and the operands of the last ``cmp``."""

    registers: dict[str, int] = field(default_factory=lambda: dict.fromkeys(REGISTERS, 0))
    stack: list[int] = field(default_factory=list)
    flags: tuple[int, int] | None = None


def parse_program(assembly: str) -> tuple[list[Instruction], dict[str, int]]:
    """Split assembly into instructions and a label -> index table.

    Directives (``.intel_syntax``, ``.globl``) are accepted and ignored.
    """
    instructions: list[Instruction] = []
    labels: dict[str, int] = {}
    for lineno, raw in enumerate(assembly.splitlines(), start=1):
        text = raw.split("#", 1)[0].strip()
        if not text or text.startswith("."):
            continue
        if text.endswith(":"):
            labels[text[:-1]] = len(instructions)
            continue
        mnemonic, _, rest = text.partition(" ")
        operands = tuple(part.strip() for part in rest.split(",")) if rest.strip() else ()
        instructions.append(Instruction(lineno, text, mnemonic, operands))
    return instructions, labels


class StackMachine:
    """Interpreter for the generated instruction subset.

    Supported: ``push``, ``pop``, ``mov``, ``add``, ``sub``, ``imul``,
    ``cqo``, ``idiv``, ``cmp``, ``set<cc>``, ``movzb``, ``ret``.

    Any fault (unknown instruction, stack underflow, division by zero,
    quotient overflow, unbalanced stack at ``ret``) raises MachineError.
    """

    __slots__ = ("_dispatch", "entry_point", "state")

    def __init__(self, entry_point: str = "main"):
        self.entry_point = entry_point
        self.state = MachineState()
        self._dispatch: dict[str, Callable[[Instruction], None]] = {
            "push": self._push,
            "pop": self._pop,
            "mov": self._mov,
            "add": self._arith(operator.add),
            "sub": self._arith(operator.sub),
            "imul": self._arith(operator.mul),
            "cqo": self._cqo,
            "idiv": self._idiv,
            "cmp": self._cmp,
            "movzb": self._movzb,
            "movzx": self._movzb,
        }

    def run(self, assembly: str) -> int:
        """Execute ``assembly`` from the entry label; return signed ``rax``."""
        instructions, labels = parse_program(assembly)
        if self.entry_point not in labels:
            raise MachineError(f"entry point {self.entry_point!r} not found")
        self.state = MachineState()

        for instruction in instructions[labels[self.entry_point] :]:
            if instruction.mnemonic == "ret":
                if self.state.stack:
                    raise MachineError(
                        f"{len(self.state.stack)} value(s) left on the stack at ret",
                        instruction.lineno,
                        instruction.text,
                    )
                return self.state.registers["rax"]
            self.step(instruction)
        raise MachineError("fell off the end of the program without ret")

    def step(self, instruction: Instruction) -> None:
        mnemonic = instruction.mnemonic
        if mnemonic.startswith("set") and mnemonic[3:] in CONDITIONS:
            self._setcc(instruction)
            return
        handler = self._dispatch.get(mnemonic)
        if handler is None:
            raise self._error(instruction, f"unsupported instruction {mnemonic!r}")
        handler(instruction)

    # -- operand helpers ------------------------------------------------

    def _error(self, instruction: Instruction, message: str) -> MachineError:
        return MachineError(message, instruction.lineno, instruction.text)

    def _operands(self, instruction: Instruction, count: int) -> tuple[str, ...]:
        if len(instruction.operands) != count:
            raise self._error(instruction, f"expected {count} operand(s)")
        return instruction.operands

    def _register(self, instruction: Instruction, name: str) -> str:
        if name not in self.state.registers:
            raise self._error(instruction, f"unknown register {name!r}")
        return name

    def _value(self, instruction: Instruction, operand: str) -> int:
        if operand in self.state.registers:
            return self.state.registers[operand]
        try:
            return int(operand, 0)
        except ValueError:
            raise self._error(instruction, f"bad operand {operand!r}") from None

    def _set(self, register: str, value: int) -> None:
        self.state.registers[register] = to_signed(value)

    # -- instructions ---------------------------------------------------

    def _push(self, instruction: Instruction) -> None:
        (operand,) = self._operands(instruction, 1)
        value = self._value(instruction, operand)
        if operand not in self.state.registers and not _IMM32_MIN <= value <= _IMM32_MAX:
            raise self._error(instruction, "push immediate does not fit in 32 bits")
        self.state.stack.append(to_signed(value))

    def _pop(self, instruction: Instruction) -> None:
        (operand,) = self._operands(instruction, 1)
        register = self._register(instruction, operand)
        if not self.state.stack:
            raise self._error(instruction, "pop from empty stack")
        self.state.registers[register] = self.state.stack.pop()

    def _mov(self, instruction: Instruction) -> None:
        dest, src = self._operands(instruction, 2)
        self._set(self._register(instruction, dest), self._value(instruction, src))

    def _arith(self, op: Callable[[int, int], int]) -> Callable[[Instruction], None]:
        def execute(instruction: Instruction) -> None:
            dest, src = self._operands(instruction, 2)
            register = self._register(instruction, dest)
            self._set(register, op(self.state.registers[register], self._value(instruction, src)))

        return execute

    def _cqo(self, instruction: Instruction) -> None:
        self._operands(instruction, 0)
        self.state.registers["rdx"] = -1 if self.state.registers["rax"] < 0 else 0

    def _idiv(self, instruction: Instruction) -> None:
        (operand,) = self._operands(instruction, 1)
        divisor = self._value(instruction, operand)
        regs = self.state.registers
        dividend = (regs["rdx"] << 64) | (regs["rax"] & _MASK)
        if divisor == 0:
            raise self._error(instruction, "division by zero")
        quotient = abs(dividend) // abs(divisor)
        if (dividend < 0) != (divisor < 0):
            quotient = -quotient
        if to_signed(quotient) != quotient:
            raise self._error(instruction, "quotient overflow")
        regs["rax"] = quotient
        regs["rdx"] = dividend - quotient * divisor

    def _cmp(self, instruction: Instruction) -> None:
        left, right = self._operands(instruction, 2)
        self.state.flags = (self._value(instruction, left), self._value(instruction, right))

    def _setcc(self, instruction: Instruction) -> None:
        (operand,) = self._operands(instruction, 1)
        if operand != "al":
            raise self._error(instruction, f"set<cc> supports only al, got {operand!r}")
        if self.state.flags is None:
            raise self._error(instruction, "set<cc> before cmp")
        a, b = self.state.flags
        bit = int(CONDITIONS[instruction.mnemonic[3:]](a, b))
        self._set("rax", (self.state.registers["rax"] & ~0xFF) | bit)

    def _movzb(self, instruction: Instruction) -> None:
        dest, src = self._operands(instruction, 2)
        if src != "al":
            raise self._error(instruction, f"movzb supports only al, got {src!r}")
        self._set(self._register(instruction, dest), self.state.registers["rax"] & 0xFF)


def run(assembly: str, entry_point: str = "main") -> int:
    """Execute ``assembly`` and return the signed 64-bit result."""
    return StackMachine(entry_point).run(assembly)
