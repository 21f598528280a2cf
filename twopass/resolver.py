"""Pass 2: relocation and use-chain resolution of external references.

Every module is first laid into the memory map word by word (relocatable
words get the module base added).  Each entry of the module's use list then
starts a chain through External words: the operand of a link is the
module-relative address of the next link, and the operand 777 ends the chain.
Every visited link gets the symbol's absolute address written into its
operand field.  Chains only read the original program text, never the memory
map, so a slot shared by two chains is rewritten but never misread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from .diagnostics import (
    ChainExceedsModuleSize,
    ChainWrongTypeLink,
    DiagnosticCatalog,
    UndefinedSymbolUse,
    UnusedEType,
)
from .records import CHAIN_TERMINATOR, AddressType, FormatError, Module
from .symbols import SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    memory_map: List[int] = field(default_factory=list)
    used_symbols: Dict[str, None] = field(default_factory=dict)


def _place_module(module: Module, base: int, memory_map: List[int]) -> Set[int]:
    pending_external: Set[int] = set()
    for slot, word in enumerate(module.text):
        if word.kind is AddressType.RELOCATABLE:
            memory_map.append(word.value + base)
        elif word.kind in (AddressType.ABSOLUTE, AddressType.IMMEDIATE):
            memory_map.append(word.value)
        else:
            memory_map.append(word.value)
            pending_external.add(base + slot)
    return pending_external


def _walk_chain(
    module: Module,
    base: int,
    symbol: str,
    start: int,
    value: int,
    memory_map: List[int],
    pending_external: Set[int],
    catalog: DiagnosticCatalog,
) -> None:
    visited: Set[int] = set()
    rel_addr = start
    while True:
        slot = base + rel_addr
        word = module.text[rel_addr]
        if word.kind is not AddressType.EXTERNAL:
            catalog.add(ChainWrongTypeLink(slot, address_type=word.kind))
        visited.add(rel_addr)
        pending_external.discard(slot)
        memory_map[slot] = word.with_operand(value)
        logger.debug("chain %s: slot %d -> %d", symbol, slot, memory_map[slot])

        if word.operand == CHAIN_TERMINATOR:
            return
        if word.operand > module.length - 1:
            catalog.add(ChainExceedsModuleSize(slot))
            return
        if word.operand in visited:
            logger.warning(
                "module %d: use chain of %s loops back to relative address %d; chain stopped",
                module.index,
                symbol,
                word.operand,
            )
            return
        rel_addr = word.operand


def resolve_addresses(modules: Sequence[Module], table: SymbolTable, catalog: DiagnosticCatalog) -> Resolution:
    if len(table.base_addresses) != len(modules):
        raise ValueError("symbol table was built for a different module list")
    result = Resolution()
    for module in modules:
        base = table.base_of(module)
        pending_external = _place_module(module, base, result.memory_map)

        for symbol, start in module.uses:
            result.used_symbols.setdefault(symbol, None)
            if start >= module.length:
                raise FormatError(
                    f"module {module.index}: use of '{symbol}' at relative address {start} "
                    f"is outside the module (length {module.length})"
                )
            if symbol in table:
                value = table.values[symbol]
            else:
                catalog.add(UndefinedSymbolUse(base + start, symbol=symbol))
                value = 0
            _walk_chain(module, base, symbol, start, value, result.memory_map, pending_external, catalog)

        for slot in sorted(pending_external):
            catalog.add(UnusedEType(slot))
    return result
