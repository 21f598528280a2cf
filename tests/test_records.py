import pytest

from twopass.records import AddressType, FormatError, Module, Word


def test_word_splits_opcode_digit_and_operand():
    word = Word.from_value(AddressType.EXTERNAL, 2777)
    assert word.opcode == 2
    assert word.operand == 777
    assert word.value == 2777


def test_short_word_has_zero_opcode_digit():
    word = Word.from_value(AddressType.ABSOLUTE, 50)
    assert word.opcode == 0
    assert word.operand == 50


def test_with_operand_keeps_opcode_digit():
    word = Word.from_value(AddressType.EXTERNAL, 7001)
    assert word.with_operand(15) == 7015


def test_with_operand_does_not_carry_into_opcode_digit():
    word = Word.from_value(AddressType.EXTERNAL, 1777)
    assert word.with_operand(1000) == 11000
    assert Word.from_value(AddressType.EXTERNAL, 777).with_operand(1000) == 1000


def test_word_out_of_range_raises():
    with pytest.raises(FormatError, match="4 decimal digits"):
        Word.from_value(AddressType.ABSOLUTE, 10000)


def test_unknown_address_type_raises():
    with pytest.raises(FormatError, match="unknown address type 'X'"):
        AddressType.from_code("X")


def test_address_type_codes():
    assert [kind.code for kind in AddressType] == ["R", "A", "I", "E"]


def test_module_normalises_lists_to_tuples():
    module = Module(3, definitions=[("foo", 1)], uses=[["bar", 0]], text=[Word(AddressType.IMMEDIATE, 0, 5)])
    assert module.definitions == (("foo", 1),)
    assert module.uses == (("bar", 0),)
    assert module.length == 1


def test_module_rejects_negative_address():
    with pytest.raises(FormatError, match="invalid address"):
        Module(0, definitions=[("foo", -1)])


def test_module_rejects_non_word_text():
    with pytest.raises(FormatError, match="not a Word"):
        Module(0, text=[("R", 1004)])
