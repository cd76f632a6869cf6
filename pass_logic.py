# pass_logic.py v1.0
"""
Contains the pass processing logic for the MIPS assembler.

Each pass reads the source file again from its first line. Pass 1 fills the
symbol table and freezes it; Pass 2 encodes the instructions, writes the
listing and machine code and finally appends the symbol block. The first
error stops the pass; its listing record carries the error message and
output already written is kept.
"""
import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mipsasm import Assembler

from lexer import parse_line
from errors import AsmException, ErrorKind
from pass1_processing import process_line_pass_1
from pass2_processing import process_line_pass_2

SOURCE_ENCODING = 'utf-8'


def _decode_line(raw_line: bytes, line_num: int) -> str:
    try:
        return raw_line.decode(SOURCE_ENCODING)
    except UnicodeDecodeError as e:
        raise AsmException(ErrorKind.IO, f"Cannot decode line {line_num} as {SOURCE_ENCODING}: {e.reason}", line_num)


def perform_pass(assembler: 'Assembler', pass_num: int) -> bool:
    state = assembler.state
    state.set_pass(pass_num)
    if pass_num == 1:
        assembler.symbol_table.reset()

    line_num = 0
    parsed = None
    try:
        with open(assembler.input_filename, 'rb') as source:
            for line_num, raw_line in enumerate(source, start=1):
                state.current_line_number = line_num
                parsed = None
                line_content = _decode_line(raw_line, line_num)
                parsed = parse_line(line_content, line_num)
                if assembler.debug_mode:
                    print(f"DEBUG P{pass_num}: L{line_num} label={parsed['label']!r} opcode={parsed['opcode']!r} "
                          f"operands={parsed['operands']} comment={parsed['comment']!r} valid={parsed['is_valid']}")

                if pass_num == 1:
                    process_line_pass_1(state, assembler.symbol_table, line_num, parsed)
                else:
                    process_line_pass_2(state, assembler.output_generator, assembler, line_num, parsed)

    except AsmException as e:
        if e.line_num is None: e.line_num = line_num
        assembler.error_reporter.add_exception(e)
        if assembler.output_generator and parsed is not None:
            assembler.output_generator.write_listing_line(parsed, error_message=e.message)
        state.finish()
        return False
    except IOError as e:
        assembler.error_reporter.add_error(f"Error reading input file: {e}", line_num or None, code=ErrorKind.IO.value)
        state.finish()
        return False
    except Exception as e:
        assembler.error_reporter.add_error(f"Unexpected error processing line {line_num}: {e}", line_num, code='F')
        traceback.print_exc()
        state.finish()
        return False

    if pass_num == 1:
        assembler.symbol_table.freeze()
        if assembler.debug_mode: print(f"DEBUG P1: {state.instruction_count} instructions, {len(assembler.symbol_table.symbols)} symbols")
    else:
        if assembler.output_generator:
            assembler.output_generator.write_symbol_table(assembler.symbol_table)
        state.finish()

    return not assembler.error_reporter.has_errors()

# pass_logic.py v1.0
