"""Typed linker diagnostics and the append-only catalog that collects them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .records import AddressType


@dataclass(frozen=True)
class Diagnostic:
    kind = "diagnostic"

    @property
    def key(self) -> Tuple[str, object]:
        raise NotImplementedError

    @property
    def message(self) -> str:
        raise NotImplementedError

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"kind": self.kind, "message": self.message}
        payload.update(self.__dict__)
        if isinstance(payload.get("address_type"), AddressType):
            payload["address_type"] = payload["address_type"].code
        return payload


@dataclass(frozen=True)
class SymbolDiagnostic(Diagnostic):
    symbol: str

    @property
    def key(self) -> Tuple[str, object]:
        return ("symbol", self.symbol)


@dataclass(frozen=True)
class AddressDiagnostic(Diagnostic):
    address: int

    @property
    def key(self) -> Tuple[str, object]:
        return ("address", self.address)


@dataclass(frozen=True)
class MultiplyDefined(SymbolDiagnostic):
    kind = "multiply_defined"

    @property
    def message(self) -> str:
        return "Error: This variable is multiply defined; first value used."


@dataclass(frozen=True)
class DefinitionOutOfRange(SymbolDiagnostic):
    kind = "definition_out_of_range"
    module: int = 0

    @property
    def message(self) -> str:
        return f"Error: The value of {self.symbol} is outside of module {self.module}; zero (relative) used"


@dataclass(frozen=True)
class UnusedDefinition(SymbolDiagnostic):
    kind = "unused_definition"
    module: int = 0

    @property
    def message(self) -> str:
        return f"Warning: {self.symbol} was defined in module {self.module} but never used."


@dataclass(frozen=True)
class UndefinedSymbolUse(AddressDiagnostic):
    kind = "undefined_symbol_use"
    symbol: str = ""

    @property
    def message(self) -> str:
        return f"Error: {self.symbol} is not defined; zero used instead"


@dataclass(frozen=True)
class ChainExceedsModuleSize(AddressDiagnostic):
    kind = "chain_exceeds_module_size"

    @property
    def message(self) -> str:
        return "Error: Pointer in use chain exceeds module size; chain terminated."


@dataclass(frozen=True)
class ChainWrongTypeLink(AddressDiagnostic):
    kind = "chain_wrong_type_link"
    address_type: AddressType = AddressType.EXTERNAL

    @property
    def message(self) -> str:
        return f"Error: {self.address_type.code} type address on use chain; treated as E type."


@dataclass(frozen=True)
class UnusedEType(AddressDiagnostic):
    kind = "unused_e_type"

    @property
    def message(self) -> str:
        return "Error: E type address not on use chain; treated as I type."


# Highest priority first; a report row shows only the first match.
SYMBOL_PRIORITY = (MultiplyDefined, DefinitionOutOfRange)
ADDRESS_PRIORITY = (UndefinedSymbolUse, ChainExceedsModuleSize, ChainWrongTypeLink, UnusedEType)


@dataclass
class DiagnosticCatalog:
    """Accumulates diagnostics from both passes; nothing is ever retracted."""

    entries: List[Diagnostic] = field(default_factory=list)
    _by_key: Dict[Tuple[str, object], List[Diagnostic]] = field(default_factory=dict, repr=False)

    def add(self, diagnostic: Diagnostic) -> Diagnostic:
        self.entries.append(diagnostic)
        self._by_key.setdefault(diagnostic.key, []).append(diagnostic)
        return diagnostic

    def has(self, kind: type, key: object) -> bool:
        scope = "address" if issubclass(kind, AddressDiagnostic) else "symbol"
        return any(isinstance(item, kind) for item in self._by_key.get((scope, key), ()))

    def for_symbol(self, symbol: str) -> List[Diagnostic]:
        return list(self._by_key.get(("symbol", symbol), ()))

    def for_address(self, address: int) -> List[Diagnostic]:
        return list(self._by_key.get(("address", address), ()))

    def symbol_annotation(self, symbol: str) -> Optional[Diagnostic]:
        return _pick(self.for_symbol(symbol), SYMBOL_PRIORITY)

    def address_annotation(self, address: int) -> Optional[Diagnostic]:
        return _pick(self.for_address(address), ADDRESS_PRIORITY)

    def warnings(self) -> List[UnusedDefinition]:
        return [item for item in self.entries if isinstance(item, UnusedDefinition)]

    def of_kind(self, kind: type) -> List[Diagnostic]:
        return [item for item in self.entries if isinstance(item, kind)]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _pick(candidates: List[Diagnostic], priority: Tuple[type, ...]) -> Optional[Diagnostic]:
    for kind in priority:
        for item in candidates:
            if isinstance(item, kind):
                return item
    return None
