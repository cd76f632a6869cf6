# instruction_table.py v1.0
"""
Instruction set definitions for the MIPS assembler.
Holds the opcode, function code and register tables and provides lookup
methods. The tables are built once and never modified.
"""

from types import MappingProxyType

R_FORMAT = 'R'
I_FORMAT = 'I'
J_FORMAT = 'J'

# Primary opcode of every recognised mnemonic
OPCODES = MappingProxyType({
    'add': 0, 'sub': 0, 'and': 0, 'or': 0, 'nor': 0, 'slt': 0,
    'sll': 0, 'jr': 0, 'nop': 0,
    'lw': 35, 'sw': 43,
    'beq': 4, 'addi': 8,
    'j': 2,
})

# Function codes of the R-format instructions (opcode 0)
FUNC_CODES = MappingProxyType({
    'add': 32, 'sub': 34, 'and': 36, 'or': 37, 'nor': 39, 'slt': 42,
    'sll': 0, 'jr': 8, 'nop': 0,
})

# The register number is the index of its name
REGISTER_NAMES = (
    '$zero', '$at', '$v0', '$v1',
    '$a0', '$a1', '$a2', '$a3',
    '$t0', '$t1', '$t2', '$t3', '$t4', '$t5', '$t6', '$t7',
    '$s0', '$s1', '$s2', '$s3', '$s4', '$s5', '$s6', '$s7',
    '$t8', '$t9',
    '$k0', '$k1',
    '$gp', '$sp', '$fp', '$ra',
)

FORMATS = MappingProxyType({
    'add': R_FORMAT, 'sub': R_FORMAT, 'and': R_FORMAT, 'or': R_FORMAT,
    'nor': R_FORMAT, 'slt': R_FORMAT, 'sll': R_FORMAT, 'jr': R_FORMAT,
    'nop': R_FORMAT,
    'lw': I_FORMAT, 'sw': I_FORMAT, 'beq': I_FORMAT, 'addi': I_FORMAT,
    'j': J_FORMAT,
})


class InstructionTable:
    """Provides access to the MIPS instruction and register definitions."""
    def __init__(self):
        self._opcodes = OPCODES
        self._func_codes = FUNC_CODES
        self._formats = FORMATS
        self._register_numbers = MappingProxyType(
            {name: number for number, name in enumerate(REGISTER_NAMES)})

    def is_instruction(self, mnemonic):
        if mnemonic is None:
            return False
        return mnemonic in self._opcodes

    def get_opcode(self, mnemonic):
        """ Returns the opcode of the mnemonic, or None if it is unknown. """
        return self._opcodes.get(mnemonic)

    def get_func_code(self, mnemonic):
        """ Returns the func code of an R-format mnemonic, or None. """
        return self._func_codes.get(mnemonic)

    def get_format(self, mnemonic):
        return self._formats.get(mnemonic)

    def get_register_number(self, name):
        """ Returns the register number, or -1 if the name is not a register. """
        return self._register_numbers.get(name, -1)

# instruction_table.py v1.0
