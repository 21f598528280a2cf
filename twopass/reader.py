"""Reader for the whitespace-delimited linker input format.

Each module is three count-prefixed lists::

    1 xy 2                  definitions: count, then symbol/address pairs
    2 z 2 xy 4              uses: count, then symbol/address pairs
    5 R 1004 I 5678 E 2777 R 8002 E 7001

Line breaks carry no meaning; only the token sequence does.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .records import AddressType, FormatError, Module, Word


def tokenize(text: str) -> List[str]:
    return text.split()


class _TokenStream:
    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens = tokens
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def next(self, context: str) -> str:
        if self.at_end():
            raise FormatError(f"unexpected end of input while reading {context}")
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def next_int(self, context: str) -> int:
        token = self.next(context)
        try:
            value = int(token, 10)
        except ValueError as exc:
            raise FormatError(f"{context}: expected an integer, got '{token}'") from exc
        if value < 0:
            raise FormatError(f"{context}: expected a non-negative integer, got {value}")
        return value


def _read_pairs(stream: _TokenStream, module_index: int, what: str) -> Tuple[Tuple[str, int], ...]:
    count = stream.next_int(f"module {module_index} {what} count")
    pairs = []
    for pos in range(count):
        context = f"module {module_index} {what} {pos}"
        symbol = stream.next(f"{context} symbol")
        rel_addr = stream.next_int(f"{context} address of '{symbol}'")
        pairs.append((symbol, rel_addr))
    return tuple(pairs)


def _read_text(stream: _TokenStream, module_index: int) -> Tuple[Word, ...]:
    count = stream.next_int(f"module {module_index} program text count")
    words = []
    for slot in range(count):
        context = f"module {module_index} text slot {slot}"
        code = stream.next(f"{context} address type")
        try:
            kind = AddressType.from_code(code)
        except FormatError as exc:
            raise FormatError(f"{context}: {exc}") from exc
        value = stream.next_int(f"{context} word")
        try:
            words.append(Word.from_value(kind, value))
        except FormatError as exc:
            raise FormatError(f"{context}: {exc}") from exc
    return tuple(words)


def parse_modules(text: str) -> List[Module]:
    """Parse linker input text into module records, failing on the first bad token."""

    return read_modules(tokenize(text))


def read_modules(tokens: Iterable[str]) -> List[Module]:
    stream = _TokenStream(list(tokens))
    modules: List[Module] = []
    while not stream.at_end():
        index = len(modules)
        definitions = _read_pairs(stream, index, "definition")
        uses = _read_pairs(stream, index, "use")
        words = _read_text(stream, index)
        modules.append(Module(index, definitions, uses, words))
    return modules
