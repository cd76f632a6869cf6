# instruction_assembler.py v1.0
"""
Handles the assembly of individual machine instructions.

An instruction is an ordered list of fields, most significant field first
(op, rs, rt, rd, sa, func for R-format). Packing walks the list backwards
and places each field above the ones already packed, so no format needs
its own bit offsets.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from instruction_table import InstructionTable

from errors import AsmException, ErrorKind
from operand_parser import parse_literal

FIELD_WIDTHS = {
    'op': 6,
    'func': 6,
    'immediate': 16,
    'address': 26,
}
DEFAULT_FIELD_WIDTH = 5 # rs, rt, rd, sa

REGISTER_FIELDS = ('rs', 'rt', 'rd')
SIGNED_FIELDS = ('immediate',)

R_TYPE_ARITHMETIC = ('add', 'sub', 'and', 'or', 'nor', 'slt')


class Field:
    """ One named bit-field of a machine word. """
    def __init__(self, name: str, value: Optional[int], token: Optional[str] = None):
        self.name = name
        self.width = FIELD_WIDTHS.get(name, DEFAULT_FIELD_WIDTH)
        self.value = value
        self.token = token # Source token the value came from, for diagnostics

    def fits(self) -> bool:
        if self.name in SIGNED_FIELDS:
            return -(1 << (self.width - 1)) <= self.value < (1 << (self.width - 1))
        return 0 <= self.value < (1 << self.width)

    def __repr__(self):
        return f"Field({self.name!r}, {self.value!r})"


class Instruction:
    """ Structure holding the fields of one encoded instruction. """
    def __init__(self, name: str, address: int, fields: List[Field], line_num: Optional[int] = None):
        self.name = name
        self.address = address
        self.fields = fields
        self.line_num = line_num

    def to_int(self) -> int:
        """ Packs the fields into a 32-bit word. """
        position = 0
        result = 0
        for field in reversed(self.fields):
            if not field.fits():
                raise AsmException(
                    ErrorKind.FIELD_OVERFLOW,
                    f'Field "{field.name}" value {field.value} does not fit in {field.width} bits',
                    self.line_num, token=field.token
                )
            bitmask = (1 << field.width) - 1
            result |= (field.value & bitmask) << position
            position += field.width
        return result

    def __str__(self):
        return " ".join(f"{field.name}:{field.value}" for field in self.fields)


class _OperandList:
    """ Hands out resolved operands by their 1-based position and remembers how many were used. """
    def __init__(self, operands: List[str], line_num: Optional[int]):
        self.operands = operands
        self.line_num = line_num
        self.consumed = 0

    def get(self, position: int) -> str:
        if position > len(self.operands):
            raise AsmException(
                ErrorKind.MALFORMED_FORMAT,
                "Incorrect instruction format: Instruction has too few arguments",
                self.line_num
            )
        self.consumed = max(self.consumed, position)
        return self.operands[position - 1]

    def has_unused(self) -> bool:
        return len(self.operands) > self.consumed


def _register_field(name: str, token: str, instruction_table: 'InstructionTable') -> Field:
    return Field(name, instruction_table.get_register_number(token), token)


def _literal_field(name: str, token: str, line_num: Optional[int], shift: int = 0, base: int = 0) -> Field:
    return Field(name, (parse_literal(token, line_num) - base) >> shift, token)


def _build_fields(mnemonic: str, address: int, args: _OperandList, instruction_table: 'InstructionTable') -> List[Field]:
    line_num = args.line_num
    fields = [Field('op', instruction_table.get_opcode(mnemonic))]
    func = instruction_table.get_func_code(mnemonic)

    # R-format
    if mnemonic in R_TYPE_ARITHMETIC:
        fields.append(_register_field('rs', args.get(2), instruction_table))
        fields.append(_register_field('rt', args.get(3), instruction_table))
        fields.append(_register_field('rd', args.get(1), instruction_table))
        fields.append(Field('sa', 0))
        fields.append(Field('func', func))
    elif mnemonic == 'sll':
        rd_token, rt_token, sa_token = args.get(1), args.get(2), args.get(3)
        fields.append(Field('rs', 0))
        fields.append(_register_field('rt', rt_token, instruction_table))
        fields.append(_register_field('rd', rd_token, instruction_table))
        fields.append(_literal_field('sa', sa_token, line_num))
        fields.append(Field('func', func))
    elif mnemonic == 'jr':
        fields.append(_register_field('rs', args.get(1), instruction_table))
        fields.append(Field('rt', 0))
        fields.append(Field('rd', 0))
        fields.append(Field('sa', 0))
        fields.append(Field('func', func))
    elif mnemonic == 'nop':
        # sll $zero, $zero, 0
        fields.extend(Field(name, 0) for name in ('rs', 'rt', 'rd', 'sa'))
        fields.append(Field('func', func))

    # I-format
    elif mnemonic in ('lw', 'sw'):
        fields.append(_register_field('rs', args.get(3), instruction_table))
        fields.append(_register_field('rt', args.get(1), instruction_table))
        fields.append(_literal_field('immediate', args.get(2), line_num))
    elif mnemonic == 'addi':
        fields.append(_register_field('rs', args.get(2), instruction_table))
        fields.append(_register_field('rt', args.get(1), instruction_table))
        fields.append(_literal_field('immediate', args.get(3), line_num))
    elif mnemonic == 'beq':
        fields.append(_register_field('rs', args.get(1), instruction_table))
        fields.append(_register_field('rt', args.get(2), instruction_table))
        # Offset in instructions, relative to the following instruction
        fields.append(_literal_field('immediate', args.get(3), line_num, shift=2, base=address + 4))

    # J-format
    elif mnemonic == 'j':
        fields.append(_literal_field('address', args.get(1), line_num, shift=2))

    return fields


def assemble_instruction(
    mnemonic: str,
    address: int,
    operands: List[str],
    instruction_table: 'InstructionTable',
    line_num: Optional[int] = None,
    debug_mode: bool = False
) -> Instruction:
    """
    Builds the field list of one instruction from its mnemonic and resolved
    operands. Raises AsmException for unknown mnemonics or registers, wrong
    operand counts and malformed literals. Range checks happen in
    Instruction.to_int().
    """
    if not instruction_table.is_instruction(mnemonic):
        raise AsmException(ErrorKind.UNKNOWN_INSTRUCTION, f'Unknown instruction "{mnemonic}"', line_num, token=mnemonic)

    args = _OperandList(operands, line_num)
    fields = _build_fields(mnemonic, address, args, instruction_table)

    for field in fields:
        if field.name in REGISTER_FIELDS and field.value == -1:
            raise AsmException(ErrorKind.UNKNOWN_REGISTER, f'Unknown register "{field.token}"', line_num, token=field.token)

    if args.has_unused():
        raise AsmException(
            ErrorKind.MALFORMED_FORMAT,
            "Incorrect instruction format: Instruction has too many arguments",
            line_num
        )

    instruction = Instruction(mnemonic, address, fields, line_num)
    if debug_mode:
        print(f"DEBUG L{line_num} assemble_instruction: {instruction_table.get_format(mnemonic)}-format {mnemonic} @ {address:#010x} -> {instruction}")
    return instruction

# instruction_assembler.py v1.0
