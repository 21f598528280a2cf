"""Text and JSON renderings of a linking run."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from .linker import LinkResult


def _annotate(line: str, diagnostic: Any) -> str:
    if diagnostic is None:
        return line
    return f"{line} {diagnostic.message}"


def format_symbol_table(result: LinkResult) -> List[str]:
    lines = ["Symbol Table"]
    for symbol, value in result.symbols.items():
        lines.append(_annotate(f"{symbol} = {value}", result.diagnostics.symbol_annotation(symbol)))
    return lines


def format_memory_map(result: LinkResult) -> List[str]:
    lines = ["Memory Map"]
    for address, word in enumerate(result.memory_map):
        label = f"{address}:"
        lines.append(_annotate(f"{label:<4}{word}", result.diagnostics.address_annotation(address)))
    return lines


def format_report(result: LinkResult) -> str:
    lines = format_symbol_table(result)
    lines.append("")
    lines.extend(format_memory_map(result))
    warnings = result.diagnostics.warnings()
    if warnings:
        lines.append("")
        lines.extend(warning.message for warning in warnings)
    return "\n".join(lines) + "\n"


def report_payload(result: LinkResult) -> Dict[str, Any]:
    diagnostics = result.diagnostics
    symbols: List[Dict[str, Any]] = []
    for symbol, value in result.symbols.items():
        entry: Dict[str, Any] = {
            "name": symbol,
            "value": value,
            "module": result.symbols.defined_in[symbol],
        }
        note = diagnostics.symbol_annotation(symbol)
        if note is not None:
            entry["error"] = note.kind
        symbols.append(entry)

    memory_map: List[Dict[str, Any]] = []
    for address, word in enumerate(result.memory_map):
        entry = {"address": address, "value": word}
        note = diagnostics.address_annotation(address)
        if note is not None:
            entry["error"] = note.kind
        memory_map.append(entry)

    return {
        "version": 1,
        "base_addresses": result.base_addresses,
        "symbols": symbols,
        "memory_map": memory_map,
        "warnings": [warning.as_dict() for warning in diagnostics.warnings()],
        "diagnostics": [item.as_dict() for item in diagnostics],
    }


def format_json(result: LinkResult) -> str:
    return json.dumps(report_payload(result), indent=2, sort_keys=True)
