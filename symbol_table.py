# symbol_table.py v1.0
"""
Symbol Table for the MIPS assembler.

Labels are staged when they are seen in Pass 1 and committed to the address
of the next instruction, so several labels stacked on label-only lines all
name the same instruction. Labels not followed by any instruction never
receive an address and are dropped. The table is frozen before Pass 2.
"""
import sys
from dataclasses import dataclass
from typing import Optional, Dict, List

from errors import AsmException, ErrorKind


@dataclass(frozen=True)
class Symbol:
    name: str
    address: int
    line_num: int


class SymbolTable:
    def __init__(self, debug_mode=False):
        self.symbols: Dict[str, Symbol] = {}
        self.staged: Dict[str, int] = {} # name -> defining line, waiting for an address
        self.debug_mode = debug_mode
        self.frozen = False

    def reset(self):
        self.symbols = {}
        self.staged = {}
        self.frozen = False

    def freeze(self):
        """ Makes the table read-only. Pending labels without an instruction are dropped. """
        if self.debug_mode and self.staged:
            print(f"!!! DEBUG SYMTABLE.FREEZE: Dropping labels with no instruction: {sorted(self.staged)}")
        self.staged = {}
        self.frozen = True

    def _defining_line(self, name: str) -> Optional[int]:
        if name in self.symbols:
            return self.symbols[name].line_num
        return self.staged.get(name)

    def stage(self, name: str, line_num: int):
        """
        Records a label definition that will receive the address of the next
        instruction. Raises AsmException if the name is already defined.
        """
        if self.frozen:
            raise RuntimeError(f"Symbol table is frozen, cannot define '{name}'")

        existing_line = self._defining_line(name)
        if existing_line is not None:
            raise AsmException(
                ErrorKind.DUPLICATE_SYMBOL,
                f'Symbol "{name}" on line {line_num} is already defined on line {existing_line}',
                line_num, token=name
            )
        self.staged[name] = line_num
        if self.debug_mode: print(f"!!! DEBUG SYMTABLE.STAGE: L{line_num} '{name}' waiting for an address")

    def commit_staged(self, address: int):
        """ Gives every staged label the address of the instruction just counted. """
        if self.frozen:
            raise RuntimeError("Symbol table is frozen, cannot commit labels")
        for name, line_num in self.staged.items():
            self.symbols[name] = Symbol(name, address, line_num)
            if self.debug_mode: print(f"!!! DEBUG SYMTABLE.COMMIT: L{line_num} '{name}' = {address:#010x}")
        self.staged = {}

    def is_defined(self, name: str) -> bool:
        return name in self.symbols

    def lookup(self, name: str) -> Optional[Symbol]:
        return self.symbols.get(name)

    def sorted_symbols(self) -> List[Symbol]:
        return [self.symbols[name] for name in sorted(self.symbols)]

    def dump_table(self, file_handle=sys.stdout):
        file_handle.write("\n--- Symbol Table Dump ---\n")
        if not self.symbols:
            file_handle.write("  (No symbols defined)\n")
        for symbol in self.sorted_symbols():
            file_handle.write(f"  {symbol.name:<10} Address: {symbol.address:#010x}  (L{symbol.line_num})\n")

# symbol_table.py v1.0
