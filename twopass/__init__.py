"""
twopass - two-pass static linker for module records.

Pass 1 assigns module base addresses and builds the symbol table; pass 2
relocates program text and resolves external references by walking use
chains.  Each concern lives in its own module:

    records.py      → module records, address types, FormatError
    diagnostics.py  → typed linker diagnostics and their catalog
    symbols.py      → pass 1 (symbol table, base addresses)
    resolver.py     → pass 2 (relocation, use-chain resolution)
    linker.py       → one linking run end to end
    reader.py       → input text → module records
    report.py       → text/JSON report writer
    cli.py          → command line front-end
"""

from .records import AddressType, FormatError, Module, Word  # noqa: F401
from .diagnostics import (  # noqa: F401
    ChainExceedsModuleSize,
    ChainWrongTypeLink,
    DefinitionOutOfRange,
    Diagnostic,
    DiagnosticCatalog,
    MultiplyDefined,
    UndefinedSymbolUse,
    UnusedDefinition,
    UnusedEType,
)
from .symbols import SymbolTable, build_symbol_table  # noqa: F401
from .resolver import Resolution, resolve_addresses  # noqa: F401
from .linker import LinkerConfig, LinkResult, link_modules, link_text  # noqa: F401
from .reader import parse_modules  # noqa: F401
from .report import format_json, format_report, report_payload  # noqa: F401

__all__ = [
    "AddressType",
    "FormatError",
    "Module",
    "Word",
    "Diagnostic",
    "DiagnosticCatalog",
    "MultiplyDefined",
    "DefinitionOutOfRange",
    "UndefinedSymbolUse",
    "ChainExceedsModuleSize",
    "ChainWrongTypeLink",
    "UnusedEType",
    "UnusedDefinition",
    "SymbolTable",
    "build_symbol_table",
    "Resolution",
    "resolve_addresses",
    "LinkerConfig",
    "LinkResult",
    "link_modules",
    "link_text",
    "parse_modules",
    "format_report",
    "format_json",
    "report_payload",
]

__version__ = "0.1.0"
