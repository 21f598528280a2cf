"""Module records consumed by both linker passes.

A module is one compilation unit: its definition list, its use list and its
program text.  Program-text words are decimal with at most four digits; the
thousands digit is the opcode and the low three digits are the operand that
relocation and external resolution rewrite.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Tuple

OPERAND_LIMIT = 1000
WORD_LIMIT = 10 * OPERAND_LIMIT
CHAIN_TERMINATOR = 777


class FormatError(ValueError):
    """Raised for input that cannot be turned into valid module records."""


class AddressType(enum.Enum):
    RELOCATABLE = "R"
    ABSOLUTE = "A"
    IMMEDIATE = "I"
    EXTERNAL = "E"

    @classmethod
    def from_code(cls, code: str) -> "AddressType":
        try:
            return cls(code)
        except ValueError as exc:
            raise FormatError(f"unknown address type '{code}' (expected R, A, I or E)") from exc

    @property
    def code(self) -> str:
        return self.value


@dataclass(frozen=True)
class Word:
    """One program-text slot: address type, opcode digit and 3-digit operand."""

    kind: AddressType
    opcode: int
    operand: int

    def __post_init__(self) -> None:
        if not isinstance(self.kind, AddressType):
            raise FormatError(f"word type must be an AddressType, got {self.kind!r}")
        if not (0 <= self.opcode <= 9):
            raise FormatError(f"opcode digit must be within 0..9, got {self.opcode}")
        if not (0 <= self.operand < OPERAND_LIMIT):
            raise FormatError(f"operand must be within 0..{OPERAND_LIMIT - 1}, got {self.operand}")

    @classmethod
    def from_value(cls, kind: AddressType, value: int) -> "Word":
        if not (0 <= value < WORD_LIMIT):
            raise FormatError(f"word {value} does not fit in 4 decimal digits")
        opcode, operand = divmod(value, OPERAND_LIMIT)
        return cls(kind, opcode, operand)

    @property
    def value(self) -> int:
        return self.opcode * OPERAND_LIMIT + self.operand

    def with_operand(self, operand: int) -> int:
        # The opcode digit stays the leading digit even when operand exceeds 999.
        if self.opcode == 0:
            return operand
        return int(f"{self.opcode}{operand:03d}")


@dataclass(frozen=True)
class Module:
    index: int
    definitions: Tuple[Tuple[str, int], ...] = ()
    uses: Tuple[Tuple[str, int], ...] = ()
    text: Tuple[Word, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples so records stay immutable.
        object.__setattr__(self, "definitions", _pairs(self.definitions, "definition", self.index))
        object.__setattr__(self, "uses", _pairs(self.uses, "use", self.index))
        object.__setattr__(self, "text", tuple(self.text))
        for slot, word in enumerate(self.text):
            if not isinstance(word, Word):
                raise FormatError(f"module {self.index}: text slot {slot} is not a Word ({word!r})")

    @property
    def length(self) -> int:
        return len(self.text)


def _pairs(entries: Iterable[Tuple[str, int]], what: str, module_index: int) -> Tuple[Tuple[str, int], ...]:
    result = []
    for pos, entry in enumerate(entries):
        try:
            symbol, rel_addr = entry
        except (TypeError, ValueError) as exc:
            raise FormatError(f"module {module_index}: {what} {pos} must be a (symbol, address) pair") from exc
        if not isinstance(symbol, str) or not symbol:
            raise FormatError(f"module {module_index}: {what} {pos} has an empty symbol name")
        if isinstance(rel_addr, bool) or not isinstance(rel_addr, int) or rel_addr < 0:
            raise FormatError(f"module {module_index}: {what} '{symbol}' has invalid address {rel_addr!r}")
        result.append((symbol, rel_addr))
    return tuple(result)
