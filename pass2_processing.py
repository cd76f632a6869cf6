# pass2_processing.py v1.0
"""
Contains the line processing logic for Pass 2 of the MIPS assembler.
Resolves the operands of each instruction against the frozen symbol table,
encodes it and writes the listing and machine code records.
"""
from typing import TYPE_CHECKING, Dict, Any

if TYPE_CHECKING:
    from mipsasm import Assembler
    from assembler_state import AssemblerState
    from output_generator import OutputGenerator

from errors import AsmException, ErrorKind
from operand_parser import resolve_operands
from instruction_assembler import assemble_instruction


def process_line_pass_2(
    state: 'AssemblerState',
    output_generator: 'OutputGenerator',
    assembler: 'Assembler',
    line_num: int,
    parsed: Dict[str, Any]
) -> bool:
    """
    Assembles one source line. Raises AsmException on the first problem,
    leaving the error record of the line to the pass driver.
    Returns True if the line produced an instruction.
    """
    debug_mode = state.debug_mode

    if not parsed['is_valid']:
        raise AsmException(ErrorKind.INVALID_LINE, f'Line not valid "{parsed["original"]}"', line_num)

    mnemonic = parsed['opcode']
    if mnemonic is None:
        output_generator.write_listing_line(parsed)
        return False

    address = state.advance_lc()
    operands = resolve_operands(parsed['operands'], assembler.symbol_table, line_num)
    if debug_mode: print(f"DEBUG P2: L{line_num} {mnemonic} operands {parsed['operands']} resolved to {operands}")

    instruction = assemble_instruction(
        mnemonic, address, operands, assembler.instruction_table, line_num, debug_mode=debug_mode
    )
    word = instruction.to_int()

    output_generator.write_listing_line(parsed, address, word)
    output_generator.write_binary_word(word)
    return True

# pass2_processing.py v1.0
