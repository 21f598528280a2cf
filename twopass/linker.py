"""Two-pass linking run: pass 1, pass 2 and the unused-definition sweep."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .diagnostics import DiagnosticCatalog, UnusedDefinition
from .reader import parse_modules
from .records import FormatError, Module
from .resolver import resolve_addresses
from .symbols import SymbolTable, build_symbol_table

logger = logging.getLogger(__name__)

DEFAULT_SYMBOL_LENGTH = 8


@dataclass
class LinkerConfig:
    max_symbol_length: int = DEFAULT_SYMBOL_LENGTH
    strict_symbol_names: bool = False


@dataclass
class LinkResult:
    symbols: SymbolTable
    memory_map: List[int]
    used_symbols: Dict[str, None] = field(default_factory=dict)
    diagnostics: DiagnosticCatalog = field(default_factory=DiagnosticCatalog)

    @property
    def base_addresses(self) -> List[int]:
        return list(self.symbols.base_addresses)


def _check_symbol_names(modules: Sequence[Module], config: LinkerConfig) -> None:
    limit = config.max_symbol_length
    for module in modules:
        for what, entries in (("definition", module.definitions), ("use", module.uses)):
            for symbol, _ in entries:
                if len(symbol) <= limit:
                    continue
                if config.strict_symbol_names:
                    raise FormatError(
                        f"module {module.index}: {what} symbol '{symbol}' exceeds {limit} characters"
                    )
                logger.warning("module %d: symbol '%s' exceeds %d characters", module.index, symbol, limit)


def link_modules(modules: Sequence[Module], config: Optional[LinkerConfig] = None) -> LinkResult:
    """Link parsed modules into a symbol table, memory map and diagnostics.

    Semantic problems never abort the run; they are recorded in the returned
    catalog next to a best-effort value.  Only malformed records raise
    :class:`FormatError`.
    """

    config = config or LinkerConfig()
    modules = list(modules)
    _check_symbol_names(modules, config)

    catalog = DiagnosticCatalog()
    table = build_symbol_table(modules, catalog)
    resolution = resolve_addresses(modules, table, catalog)

    for symbol in table:
        if symbol not in resolution.used_symbols:
            catalog.add(UnusedDefinition(symbol, module=table.defined_in[symbol]))

    logger.info(
        "linked %d modules: %d words, %d symbols, %d diagnostics",
        len(modules),
        len(resolution.memory_map),
        len(table),
        len(catalog),
    )
    return LinkResult(
        symbols=table,
        memory_map=resolution.memory_map,
        used_symbols=resolution.used_symbols,
        diagnostics=catalog,
    )


def link_text(text: str, config: Optional[LinkerConfig] = None) -> LinkResult:
    return link_modules(parse_modules(text), config)
