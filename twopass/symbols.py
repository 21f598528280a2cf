"""Pass 1: module base addresses and the global symbol table."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Tuple

from .diagnostics import DefinitionOutOfRange, DiagnosticCatalog, MultiplyDefined
from .records import FormatError, Module

logger = logging.getLogger(__name__)


@dataclass
class SymbolTable:
    """Symbol values in first-seen order plus the per-module base addresses."""

    values: Dict[str, int] = field(default_factory=dict)
    defined_in: Dict[str, int] = field(default_factory=dict)
    base_addresses: List[int] = field(default_factory=list)
    total_length: int = 0

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, symbol: str, default: int = 0) -> int:
        return self.values.get(symbol, default)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self.values.items())

    def base_of(self, module: Module) -> int:
        return self.base_addresses[module.index]


def build_symbol_table(modules: Sequence[Module], catalog: DiagnosticCatalog) -> SymbolTable:
    table = SymbolTable()
    running = 0
    for position, module in enumerate(modules):
        if module.index != position:
            raise FormatError(f"module at position {position} carries index {module.index}")
        base = running
        table.base_addresses.append(base)
        running += module.length
        logger.debug("module %d: base=%d length=%d", module.index, base, module.length)

        for symbol, rel_addr in module.definitions:
            if rel_addr >= module.length:
                catalog.add(DefinitionOutOfRange(symbol, module=module.index))
                rel_addr = 0
            address = base + rel_addr
            if symbol in table.values:
                if not catalog.has(MultiplyDefined, symbol):
                    catalog.add(MultiplyDefined(symbol))
                logger.debug("module %d: ignoring redefinition of %s", module.index, symbol)
                continue
            table.values[symbol] = address
            table.defined_in[symbol] = module.index
            logger.debug("module %d: %s = %d", module.index, symbol, address)

    table.total_length = running
    return table
