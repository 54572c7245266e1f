"""Reference table of Stacky instructions used by completion, hover and validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Documentation record for a single instruction."""

    name: str
    description: str
    stack_effect: str
    signature: Optional[str] = None


COMMANDS: Tuple[CommandSpec, ...] = (
    CommandSpec("nop", "No operation.", "Pop 0 | Push 0"),
    CommandSpec("push", "Push a value onto the stack.", "Pop 0 | Push 1"),
    CommandSpec("pop", "Pop the top value from the stack.", "Pop 1(n) | Push 0"),
    CommandSpec("add", "Pop two values, push first + second.", "Pop 2 | Push 1"),
    CommandSpec("sub", "Pop two values, push first - second.", "Pop 2 | Push 1"),
    CommandSpec("mul", "Pop two values, push first * second.", "Pop 2 | Push 1"),
    CommandSpec("div", "Pop two values, push first / second.", "Pop 2 | Push 1"),
    CommandSpec("mod", "Pop two values, push first % second", "Pop 2 | Push 1"),
    CommandSpec("neg", "Pop a value, push !value", "Pop 1 | Push 1"),
    CommandSpec("dup", "Duplicate the top value on the stack.", "Pop 1 | Push 2"),
    CommandSpec("print", "Pop and print the top value to output.", "Pop n | Push 0"),
    CommandSpec(
        "println",
        "Pop and print the top value to output with a newline.",
        "Pop n | Push 0",
    ),
    CommandSpec(
        "read",
        "Read a value from input and push it onto the stack.",
        "Pop 0 | Push 1",
    ),
    CommandSpec("goto", "Jump to the specified label.", "Pop 0 | Push 0", "goto <label>"),
    CommandSpec("br", "Pop value, if true jump to label.", "Pop 1 | Push 0", "br <label>"),
    CommandSpec("load", "Load a ariable and push its value.", "Pop 0 | Push 1", "load <var>"),
    CommandSpec(
        "store",
        "Store the top of stack into a variable.",
        "Pop 1 | Push 0",
        "store <var>",
    ),
    CommandSpec("gt", "Pop two values, push first > second.", "Pop 2 | Push 1"),
    CommandSpec("lt", "Pop two values, push first < second.", "Pop 2 | Push 1"),
    CommandSpec("ge", "Pop two values, push first >= second.", "Pop 2 | Push 1"),
    CommandSpec("le", "Pop two values, push first <= second.", "Pop 2 | Push 1"),
    CommandSpec("eq", "Pop two values, push first == second", "Pop 2 | Push 1"),
    CommandSpec("ne", "Pop two values, push first != second", "Pop 2 | Push 1"),
    CommandSpec("and", "Pop two values, push first & second.", "Pop 2 | Push 1"),
    CommandSpec("or", "Pop two values, push first | second.", "Pop 2 | Push 1"),
    CommandSpec("not", "Pop a value, push !first", "Pop 1 | Push 1"),
    CommandSpec("xor", "Pop two values, push first ^ second.", "Pop 2 | Push 1"),
    CommandSpec("shl", "Pop two values, push first << second.", "Pop 2 | Push 1"),
    CommandSpec("shr", "Pop two values, push first >> second.", "Pop 2 | Push 1"),
    CommandSpec("convert", "Convert value from type.", "Pop 1 | Push 1", "convert <type>"),
    CommandSpec(
        "rotl",
        "Pop two ints, rotate first left by second bits.",
        "Pop 2 | Push 1",
    ),
    CommandSpec(
        "rotr",
        "Pop two ints, rotate first right by second bits.",
        "Pop 2 | Push 1",
    ),
    CommandSpec("clz", "Count leading zeros of top-of-stack integer.", "Pop 1 | Push 1"),
    CommandSpec("ctz", "Count trailing zeros of top-of-stack integer.", "Pop 1 | Push 1"),
    CommandSpec("min", "Pop two values and push the minimum.", "Pop 2 | Push 1"),
    CommandSpec("max", "Pop two values and push the maximum.", "Pop 2 | Push 1"),
    CommandSpec("abs", "Pop a value and push its absolute value.", "Pop 1 | Push 1"),
    CommandSpec(
        "sign",
        "Pop a value and push -1/0/1 depending on sign.",
        "Pop 1 | Push 1",
    ),
    CommandSpec("ceil", "Pop a float and push its ceiling.", "Pop 1 | Push 1"),
    CommandSpec("floor", "Pop a float and push its floor.", "Pop 1 | Push 1"),
    CommandSpec(
        "trunc",
        "Pop a float and push its truncation toward zero.",
        "Pop 1 | Push 1",
    ),
    CommandSpec(
        "sqrt",
        "Pop a numeric value and push its square root (float).",
        "Pop 1 | Push 1",
    ),
    CommandSpec(
        "pow",
        "Pop two values and push first^second (as float).",
        "Pop 2 | Push 1",
    ),
    CommandSpec("sin", "Pop a numeric value and push sin(value).", "Pop 1 | Push 1"),
    CommandSpec("cos", "Pop a numeric value and push cos(value).", "Pop 1 | Push 1"),
    CommandSpec("tan", "Pop a numeric value and push tan(value).", "Pop 1 | Push 1"),
    CommandSpec("asin", "Pop a numeric value and push asin(value).", "Pop 1 | Push 1"),
    CommandSpec("acos", "Pop a numeric value and push acos(value).", "Pop 1 | Push 1"),
    CommandSpec("atan", "Pop a numeric value and push atan(value).", "Pop 1 | Push 1"),
    CommandSpec("sinh", "Pop a numeric value and push sinh(value).", "Pop 1 | Push 1"),
    CommandSpec("cosh", "Pop a numeric value and push cosh(value).", "Pop 1 | Push 1"),
    CommandSpec("tanh", "Pop a numeric value and push tanh(value).", "Pop 1 | Push 1"),
    CommandSpec("asinh", "Pop a numeric value and push asinh(value).", "Pop 1 | Push 1"),
    CommandSpec("acosh", "Pop a numeric value and push acosh(value).", "Pop 1 | Push 1"),
    CommandSpec("atanh", "Pop a numeric value and push atanh(value).", "Pop 1 | Push 1"),
    CommandSpec("exp", "Pop a numeric value and push exp(value).", "Pop 1 | Push 1"),
    CommandSpec(
        "log",
        "Pop a numeric value and push natural log(value).",
        "Pop 1 | Push 1",
    ),
    CommandSpec("len", "Pop a string and push its length.", "Pop 1 | Push 1"),
    CommandSpec(
        "getarg",
        "Pop an index and push the command-line argument at that index, or nil if out of range.",
        "Pop 1 | Push 1",
    ),
    CommandSpec("assert", "Assert that the top of stack is true.", "Pop 1(2) | Push 0"),
    CommandSpec("error", "Raise a runtime error with an error message.", "Pop 1 | Push 0"),
    CommandSpec("exit", "Exit the program with provided exit code.", "Pop 1 | Push 0"),
)

CONSTANTS: Tuple[str, ...] = ("true", "false", "nil")

TYPE_NAMES: Tuple[str, ...] = ("string", "int", "float", "bool", "nil")

_BY_NAME: Dict[str, CommandSpec] = {spec.name: spec for spec in COMMANDS}


def lookup(name: str) -> Optional[CommandSpec]:
    """Return the catalog entry named exactly *name*, if any."""

    return _BY_NAME.get(name)


def command_names() -> Tuple[str, ...]:
    return tuple(spec.name for spec in COMMANDS)


def display_signature(spec: CommandSpec) -> str:
    return spec.signature or spec.name


__all__ = [
    "CommandSpec",
    "COMMANDS",
    "CONSTANTS",
    "TYPE_NAMES",
    "lookup",
    "command_names",
    "display_signature",
]
