# operand_parser.py v1.0
"""
Resolves the raw argument tokens of an instruction line.
Splits base+offset operands, replaces label references with the decimal
address from the symbol table and decodes numeric literals.
"""
import re
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from symbol_table import SymbolTable

from errors import AsmException, ErrorKind

# Registers by index ($0-$31) or by name
REG_REGEX_STR = r'\$(?:[12]\d?|3[01]?|[04-9]|a[t0-3]|v[01]|t\d|s[p0-7]|k[01]|gp|fp|ra|zero)'

# Literal as accepted in front of a base register
OFFSET_LITERAL_REGEX_STR = r'(?:0(?:x[\da-fA-F]+|[0-7]+)?|-?[1-9]\d*)'

# Groups: (offset, register)
OFFSET_REGISTER_REGEX = re.compile(
    f'(?P<offset>{OFFSET_LITERAL_REGEX_STR})\\((?P<register>{REG_REGEX_STR})\\)',
    re.ASCII
)

# Registers start with '$', literals with a digit or '-'. Anything else is a label.
NON_LABEL_START_REGEX = re.compile(r'[$\-0-9]')

# Groups: (sign, hex digits, octal digits, decimal digits)
LITERAL_REGEX = re.compile(
    r'([+-]?)(?:0[xX]([0-9a-fA-F]+)|0([0-7]+)|(0|[1-9][0-9]*))'
)

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


def parse_literal(token: str, line_num: int = None) -> int:
    """
    Decodes a decimal, 0x-prefixed hexadecimal or 0-prefixed octal literal,
    with an optional sign. The value must fit a signed 32-bit integer.
    """
    match = LITERAL_REGEX.fullmatch(token) if token is not None else None
    if match:
        sign, hex_digits, oct_digits, dec_digits = match.groups()
        if hex_digits is not None: value = int(hex_digits, 16)
        elif oct_digits is not None: value = int(oct_digits, 8)
        else: value = int(dec_digits)
        if sign == '-':
            value = -value
        if INT32_MIN <= value <= INT32_MAX:
            return value
    raise AsmException(
        ErrorKind.MALFORMED_LITERAL,
        f'Immediate field value "{token}" is not a decimal, hexadecimal or octal number',
        line_num, token=token
    )


def is_label_reference(token: str) -> bool:
    return not NON_LABEL_START_REGEX.match(token)


def resolve_operands(operands: List[str], symbol_table: 'SymbolTable', line_num: int) -> List[str]:
    """
    Normalizes the raw argument tokens of one line. Order is preserved:
      - 'offset($reg)' becomes the two operands 'offset', '$reg'
      - a label reference becomes its decimal address
      - registers and literals are passed through unchanged
    """
    resolved = []
    for arg in operands:
        offset_match = OFFSET_REGISTER_REGEX.fullmatch(arg)
        if offset_match:
            resolved.append(offset_match.group('offset'))
            resolved.append(offset_match.group('register'))
        elif is_label_reference(arg):
            symbol = symbol_table.lookup(arg)
            if symbol is None:
                raise AsmException(ErrorKind.UNDEFINED_SYMBOL, f'Symbol "{arg}" is not defined', line_num, token=arg)
            resolved.append(str(symbol.address))
        else:
            resolved.append(arg)
    return resolved

# operand_parser.py v1.0
