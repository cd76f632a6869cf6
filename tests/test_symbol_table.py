import io

import pytest

from errors import AsmException, ErrorKind
from symbol_table import Symbol, SymbolTable


def test_staged_labels_get_next_instruction_address():
    table = SymbolTable()
    table.stage("first", 1)
    table.stage("second", 2)
    assert not table.is_defined("first")
    table.commit_staged(12)
    assert table.lookup("first") == Symbol("first", 12, 1)
    assert table.lookup("second") == Symbol("second", 12, 2)
    assert table.staged == {}


def test_duplicate_against_committed_symbol():
    table = SymbolTable()
    table.stage("loop", 3)
    table.commit_staged(0)
    with pytest.raises(AsmException) as exc_info:
        table.stage("loop", 9)
    exc = exc_info.value
    assert exc.kind is ErrorKind.DUPLICATE_SYMBOL
    assert exc.line_num == 9
    assert exc.message == 'Symbol "loop" on line 9 is already defined on line 3'


def test_duplicate_against_staged_symbol():
    table = SymbolTable()
    table.stage("loop", 3)
    with pytest.raises(AsmException) as exc_info:
        table.stage("loop", 4)
    assert exc_info.value.kind is ErrorKind.DUPLICATE_SYMBOL
    assert "already defined on line 3" in exc_info.value.message


def test_lookup_is_case_sensitive():
    table = SymbolTable()
    table.stage("Loop", 1)
    table.commit_staged(0)
    assert table.lookup("loop") is None
    assert table.lookup("Loop").address == 0


def test_freeze_drops_pending_labels_and_blocks_changes():
    table = SymbolTable()
    table.stage("tail", 5)
    table.freeze()
    assert table.lookup("tail") is None
    with pytest.raises(RuntimeError):
        table.stage("other", 6)
    with pytest.raises(RuntimeError):
        table.commit_staged(0)


def test_reset_clears_everything():
    table = SymbolTable()
    table.stage("a", 1)
    table.commit_staged(0)
    table.freeze()
    table.reset()
    assert table.symbols == {}
    assert not table.frozen


def test_symbols_are_immutable():
    symbol = Symbol("a", 0, 1)
    with pytest.raises(AttributeError):
        symbol.address = 4


def test_sorted_symbols():
    table = SymbolTable()
    for line_num, name in enumerate(["zeta", "alpha", "Mid", "beta"], start=1):
        table.stage(name, line_num)
        table.commit_staged(line_num * 4)
    assert [s.name for s in table.sorted_symbols()] == ["Mid", "alpha", "beta", "zeta"]


def test_dump_table():
    table = SymbolTable()
    table.stage("main", 1)
    table.commit_staged(0)
    out = io.StringIO()
    table.dump_table(file_handle=out)
    assert "main" in out.getvalue()
    assert "0x00000000" in out.getvalue()
