# pass1_processing.py v1.0
"""
Contains the line processing logic for Pass 1 of the MIPS assembler.
Pass 1 only builds the symbol table; it counts instructions so every label
gets the address of the instruction that follows it.
"""
from typing import TYPE_CHECKING, Dict, Any

if TYPE_CHECKING:
    from assembler_state import AssemblerState
    from symbol_table import SymbolTable


def process_line_pass_1(
    state: 'AssemblerState',
    symbol_table: 'SymbolTable',
    line_num: int,
    parsed: Dict[str, Any]
) -> bool:
    """
    Records the label of a line and counts its instruction.
    Invalid lines are skipped here; they are reported in Pass 2.
    Raises AsmException when a label is defined twice.
    Returns True if the line holds an instruction.
    """
    if not parsed['is_valid']:
        if state.debug_mode: print(f"DEBUG P1: L{line_num} Invalid line skipped")
        return False

    label = parsed['label']
    if label is not None:
        symbol_table.stage(label, line_num)

    if parsed['opcode'] is None:
        return False

    address = state.advance_lc()
    symbol_table.commit_staged(address)
    return True

# pass1_processing.py v1.0
