# output_generator.py v1.0
"""
Handles the generation of the listing file and the machine code file
for the MIPS assembler.

Listing record columns:
    address + encoding (or error message) | label: | mnemonic | arguments | comment
followed, after a successful Pass 2, by the sorted symbol block.
"""
import sys
from typing import TYPE_CHECKING, Optional, Dict, Any

if TYPE_CHECKING:
    from symbol_table import SymbolTable

CODE_FIELD_WIDTH = 22
LABEL_FIELD_WIDTH = 10
MNEMONIC_FIELD_WIDTH = 3
OPERAND_FIELD_WIDTH = 15
SYMBOL_NAME_WIDTH = 10


def format_word(value: int) -> str:
    """ 0x-prefixed, 8 lowercase hex digits. """
    return f"{value & 0xFFFFFFFF:#010x}"


class OutputGenerator:
    def __init__(self, listing_file_handle, binary_file_handle):
        self.listing_file = listing_file_handle
        self.binary_file = binary_file_handle
        self.words_written = 0

    def _write_listing(self, text: str):
        if self.listing_file:
            self.listing_file.write(text)

    def format_listing_line(
        self,
        parsed: Dict[str, Any],
        address: Optional[int] = None,
        word: Optional[int] = None,
        error_message: Optional[str] = None
    ) -> str:
        if error_message is not None:
            code_str = error_message
        elif address is not None and word is not None:
            code_str = f"{format_word(address)}  {format_word(word)}"
        else:
            code_str = ""

        label_str = f"{parsed['label']}:" if parsed.get('label') else ""
        mnemonic_str = parsed.get('opcode') or ""
        operand_str = ", ".join(parsed.get('operands') or [])
        comment_str = parsed.get('comment') or ""

        return (f"{code_str:<{CODE_FIELD_WIDTH}}  {label_str:>{LABEL_FIELD_WIDTH}}  "
                f"{mnemonic_str:<{MNEMONIC_FIELD_WIDTH}}  {operand_str:<{OPERAND_FIELD_WIDTH}}  {comment_str}\n")

    def write_listing_line(
        self,
        parsed: Dict[str, Any],
        address: Optional[int] = None,
        word: Optional[int] = None,
        error_message: Optional[str] = None
    ):
        """
        Writes the listing record of one source line. The address and encoding
        are listed only when the line produced an instruction; an error message
        takes their place when the line failed.
        """
        self._write_listing(self.format_listing_line(parsed, address, word, error_message))

    def write_binary_word(self, word: int):
        if self.binary_file:
            self.binary_file.write(format_word(word) + "\n")
            self.words_written += 1

    def write_symbol_table(self, symbol_table: 'SymbolTable'):
        self._write_listing("\n\nSymbols:\n")
        for symbol in symbol_table.sorted_symbols():
            self._write_listing(f"{symbol.name:<{SYMBOL_NAME_WIDTH}}\t0X{symbol.address & 0xFFFFFFFF:08X}\n")

    def flush(self):
        for handle in (self.listing_file, self.binary_file):
            if handle:
                try:
                    handle.flush()
                except (IOError, ValueError):
                    print("Error flushing output file.", file=sys.stderr)

# output_generator.py v1.0
