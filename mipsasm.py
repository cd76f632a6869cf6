# mipsasm.py v1.0
"""
MIPSASM - Two-pass assembler for a subset of the MIPS instruction set.
Main application entry point.

Translates add, sub, and, or, nor, slt, sll, jr, nop, lw, sw, addi, beq and
j into 32-bit machine words and writes a listing with a symbol table.
"""

import argparse
import sys
import traceback
from typing import Optional

from symbol_table import SymbolTable
from instruction_table import InstructionTable
from assembler_state import AssemblerState
from output_generator import OutputGenerator
from errors import ErrorReporter, ErrorKind
from pass_logic import perform_pass

DEFAULT_INPUT_FILENAME = "assembly.in"
DEFAULT_LISTING_FILENAME = "listing.out"
DEFAULT_BINARY_FILENAME = "instructions.out"
VERSION = "1.0.0"

class Assembler:
    """ Encapsulates the assembler state and processes. """
    def __init__(self, input_filename: str, listing_filename: Optional[str] = None, binary_filename: Optional[str] = None, debug_mode: bool = False):
        self.input_filename = input_filename
        self.listing_filename = listing_filename
        self.binary_filename = binary_filename if binary_filename else DEFAULT_BINARY_FILENAME
        self.debug_mode = debug_mode
        self.error_reporter = ErrorReporter()
        self.symbol_table = SymbolTable(debug_mode=self.debug_mode)
        self.instruction_table = InstructionTable()
        self.state = AssemblerState()
        self.state.debug_mode = self.debug_mode
        self.output_generator: Optional[OutputGenerator] = None
        self._listing_handle = None
        self._binary_handle = None

    def assemble(self) -> bool:
        """ Performs the two-pass assembly process. Returns True only if both passes succeed. """
        print(f"Starting assembly for: {self.input_filename}")
        if not self._check_input_file(): return False

        try:
            if not self._open_output_files():
                return False
            self.output_generator = OutputGenerator(self._listing_handle, self._binary_handle)
            return self._run_passes()
        finally:
            self._close_output_files()
            self._print_summary()

    def _run_passes(self) -> bool:
        print("\n--- Starting Pass 1 ---")
        if not perform_pass(self, 1):
            print("Assembly failed in Pass 1.")
            return False
        print("--- Pass 1 Complete ---")

        if self.debug_mode:
            self.symbol_table.dump_table(file_handle=sys.stdout)

        print("\n--- Starting Pass 2 ---")
        if not perform_pass(self, 2):
            print("Assembly failed in Pass 2.")
            return False
        print("--- Pass 2 Complete ---")

        print(f"Assembly finished successfully. {self.output_generator.words_written} instruction(s) written.")
        return True

    def _check_input_file(self) -> bool:
        try:
            with open(self.input_filename, 'r'): return True
        except FileNotFoundError: self.error_reporter.add_error(f"Input file not found: {self.input_filename}", code=ErrorKind.IO.value)
        except IOError as e: self.error_reporter.add_error(f"Error reading input file: {e}", code=ErrorKind.IO.value)
        self._print_summary()
        return False

    def _open_output_files(self) -> bool:
        self._listing_handle = sys.stdout
        if self.listing_filename:
            try:
                self._listing_handle = open(self.listing_filename, 'w')
            except IOError as e:
                self._listing_handle = None
                self.error_reporter.add_error(f"Cannot open listing file '{self.listing_filename}': {e}", code=ErrorKind.IO.value)
                return False

        try:
            self._binary_handle = open(self.binary_filename, 'w')
        except IOError as e:
            self._binary_handle = None
            self.error_reporter.add_error(f"Cannot open binary file '{self.binary_filename}': {e}", code=ErrorKind.IO.value)
            return False
        return True

    def _close_output_files(self):
        if self.output_generator:
            self.output_generator.flush()
        if self._listing_handle and self._listing_handle is not sys.stdout:
            self._listing_handle.close()
        if self._binary_handle:
            self._binary_handle.close()
        self._listing_handle = None
        self._binary_handle = None

    def _print_summary(self):
        print("\n--- Assembly Summary ---")
        self.error_reporter.print_summary()
        print("--- End Summary ---")


def assemble_file(input_filename: str, listing_filename: str, binary_filename: str, debug_mode: bool = False) -> bool:
    """ Assembles input_filename into a listing and a machine code file. """
    return Assembler(input_filename, listing_filename, binary_filename, debug_mode=debug_mode).assemble()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=f"MIPS Assembler v{VERSION}")
    parser.add_argument("input_file", nargs="?", default=DEFAULT_INPUT_FILENAME,
                        help=f"MIPS source file to assemble (defaults to '{DEFAULT_INPUT_FILENAME}').")
    parser.add_argument("-l", "--listing", default=DEFAULT_LISTING_FILENAME,
                        help=f"Output listing file name (defaults to '{DEFAULT_LISTING_FILENAME}', '-' for stdout).")
    parser.add_argument("-o", "--output", default=DEFAULT_BINARY_FILENAME,
                        help=f"Output machine code file name (defaults to '{DEFAULT_BINARY_FILENAME}').")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug mode.")

    args = parser.parse_args(argv)

    assembler = Assembler(
        input_filename=args.input_file,
        listing_filename=None if args.listing == '-' else args.listing,
        binary_filename=args.output,
        debug_mode=args.debug
    )

    exit_code = 0
    try:
        if not assembler.assemble(): exit_code = 1
    except Exception as e: print(f"CRITICAL UNHANDLED ERROR: {e}"); traceback.print_exc(); exit_code = 1

    print("Done.")
    return exit_code

if __name__ == "__main__":
    sys.exit(main())

# mipsasm.py v1.0
