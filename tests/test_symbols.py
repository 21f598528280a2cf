import pytest

from twopass.diagnostics import DefinitionOutOfRange, DiagnosticCatalog, MultiplyDefined
from twopass.records import AddressType, FormatError, Module, Word
from twopass.symbols import build_symbol_table


def _text(length):
    return [Word(AddressType.IMMEDIATE, 0, 0)] * length


def test_base_addresses_are_running_sums():
    modules = [Module(i, text=_text(length)) for i, length in enumerate([5, 0, 3, 7])]
    table = build_symbol_table(modules, DiagnosticCatalog())
    assert table.base_addresses == [0, 5, 5, 8]
    assert table.total_length == 15


def test_definitions_are_relocated_by_base():
    modules = [
        Module(0, definitions=[("a", 2)], text=_text(4)),
        Module(1, definitions=[("b", 0), ("c", 1)], text=_text(2)),
    ]
    table = build_symbol_table(modules, DiagnosticCatalog())
    assert table.values == {"a": 2, "b": 4, "c": 5}
    assert table.defined_in == {"a": 0, "b": 1, "c": 1}


def test_first_definition_wins_and_is_flagged_once():
    modules = [
        Module(0, definitions=[("dup", 1)], text=_text(2)),
        Module(1, definitions=[("dup", 0)], text=_text(2)),
        Module(2, definitions=[("dup", 1)], text=_text(2)),
    ]
    catalog = DiagnosticCatalog()
    table = build_symbol_table(modules, catalog)
    assert table.values["dup"] == 1
    assert table.defined_in["dup"] == 0
    assert catalog.of_kind(MultiplyDefined) == [MultiplyDefined("dup")]


def test_out_of_range_definition_is_clamped_to_base():
    modules = [
        Module(0, text=_text(3)),
        Module(1, definitions=[("far", 2)], text=_text(2)),
    ]
    catalog = DiagnosticCatalog()
    table = build_symbol_table(modules, catalog)
    assert table.values["far"] == 3
    assert list(catalog) == [DefinitionOutOfRange("far", module=1)]
    assert catalog.symbol_annotation("far") == DefinitionOutOfRange("far", module=1)


def test_symbol_order_follows_first_definition():
    modules = [
        Module(0, definitions=[("zeta", 0), ("alpha", 0)], text=_text(1)),
        Module(1, definitions=[("mid", 0), ("zeta", 0)], text=_text(1)),
    ]
    table = build_symbol_table(modules, DiagnosticCatalog())
    assert list(table) == ["zeta", "alpha", "mid"]


def test_module_index_must_match_position():
    with pytest.raises(FormatError, match="carries index 4"):
        build_symbol_table([Module(4, text=_text(1))], DiagnosticCatalog())


def test_redefinition_out_of_range_is_flagged_both_ways():
    modules = [
        Module(0, definitions=[("X", 0)], text=_text(1)),
        Module(1, definitions=[("X", 5)], text=_text(2)),
    ]
    catalog = DiagnosticCatalog()
    table = build_symbol_table(modules, catalog)
    assert table.values["X"] == 0
    assert list(catalog) == [DefinitionOutOfRange("X", module=1), MultiplyDefined("X")]
    assert catalog.symbol_annotation("X") == MultiplyDefined("X")
