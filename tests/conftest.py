"""
Pytest configuration and shared inputs for twopass tests.
"""
import logging
import textwrap

import pytest

from twopass.records import AddressType, Module, Word


def words(*pairs):
    return tuple(Word.from_value(AddressType.from_code(code), value) for code, value in pairs)


# Three modules exercising a multiply defined symbol, an out-of-range
# definition, an undefined use and an unused definition.
SAMPLE_INPUT = textwrap.dedent(
    """
    1 X 1
    1 Y 0
    3 E 1002 R 1000 E 2777

    2 Y 0 Z 5
    1 X 1
    2 A 3000 E 4777

    1 X 0
    1 W 0
    1 E 5777
    """
)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """
    The CLI configures the root logger with basicConfig(); drop the handlers
    it installed so later tests do not write into a closed capture stream.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers and not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def sample_text():
    return SAMPLE_INPUT


@pytest.fixture
def two_modules():
    """Module 0 defines X; module 1 uses it through a single terminal link."""
    return [
        Module(0, definitions=[("X", 0)], text=words(("A", 111), ("R", 50))),
        Module(1, uses=[("X", 0)], text=words(("E", 777), ("I", 99))),
    ]
