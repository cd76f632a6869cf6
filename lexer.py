# lexer.py v1.0
"""
Provides the line parsing functionality for the MIPS assembler.

A source line has the shape

    [label:]  [mnemonic  [arg1 [, arg2 [, arg3]]]]  [# comment]

and is scanned left to right. A line that is not consumed completely by
this shape is invalid.
"""

TAB_WIDTH = 4
MAX_OPERANDS = 3

# ASCII whitespace, as recognised by the grammar.
WHITESPACE = ' \t\n\x0b\f\r'


def _is_word_char(char):
    return char.isascii() and (char.isalnum() or char == '_')

def _is_label_char(char):
    return _is_word_char(char) or char == '.'

def _is_mnemonic_char(char):
    return char.isascii() and char.isalnum()

def _is_argument_char(char):
    return char not in WHITESPACE and char not in ',#'

def _skip_blanks(line, pos):
    while pos < len(line) and line[pos] in WHITESPACE:
        pos += 1
    return pos


def _scan_label(line):
    """
    Labels start in column 0: a letter, underscore or dot followed by word
    characters or dots, then optional blanks and ':'.
    Returns (label, position after the colon) or (None, 0).
    """
    if not line or not _is_label_char(line[0]) or line[0].isdigit():
        return None, 0
    end = 1
    while end < len(line) and _is_label_char(line[end]):
        end += 1
    colon_pos = _skip_blanks(line, end)
    if colon_pos < len(line) and line[colon_pos] == ':':
        return line[:end], colon_pos + 1
    return None, 0


def _scan_mnemonic(line, pos):
    """
    A mnemonic must be preceded by a blank and end at a blank or at the
    end of the line. Returns (mnemonic, end position) or (None, pos).
    """
    if pos == 0 or pos >= len(line) or line[pos - 1] not in WHITESPACE:
        return None, pos
    end = pos
    while end < len(line) and _is_mnemonic_char(line[end]):
        end += 1
    if end == pos:
        return None, pos
    if end < len(line) and line[end] not in WHITESPACE:
        return None, pos
    return line[pos:end], end


def _scan_argument(line, pos):
    end = pos
    while end < len(line) and _is_argument_char(line[end]):
        end += 1
    return line[pos:end], end


def _scan_operands(line, pos):
    """ Scans up to MAX_OPERANDS comma separated arguments. """
    operands = []
    start = _skip_blanks(line, pos)
    if start >= len(line) or not _is_argument_char(line[start]):
        return operands, pos
    arg, pos = _scan_argument(line, start)
    operands.append(arg)

    while len(operands) < MAX_OPERANDS:
        comma_pos = _skip_blanks(line, pos)
        if comma_pos >= len(line) or line[comma_pos] != ',':
            break
        start = _skip_blanks(line, comma_pos + 1)
        if start >= len(line) or not _is_argument_char(line[start]):
            break # Dangling comma, left for the final check
        arg, pos = _scan_argument(line, start)
        operands.append(arg)
    return operands, pos


def _scan_comment(line, pos):
    """
    A comment runs from '#' to the last non-blank character of the line and
    needs at least one non-blank character after the '#'.
    """
    if pos >= len(line) or line[pos] != '#':
        return None, pos
    text = line[pos:].rstrip(WHITESPACE)
    if len(text) < 2:
        return None, pos
    return text, len(line)


def expand_tabs(line):
    return line.replace('\t', ' ' * TAB_WIDTH)


def parse_line(line, line_num):
    """
    Parses a single line of MIPS assembly source.
    Returns a dictionary containing the fields:
        'line_num': Original line number.
        'original': The line with tabs expanded.
        'label': The label defined on the line, or None.
        'opcode': The mnemonic found, or None.
        'operands': List of 0-3 raw argument strings.
        'comment': The comment string (starting with '#'), or None.
        'is_valid': False if the line does not match the grammar. All other
                    fields are then empty.
    """
    line = expand_tabs(line.rstrip('\r\n'))

    fields = {
        'line_num': line_num,
        'original': line,
        'label': None,
        'opcode': None,
        'operands': [],
        'comment': None,
        'is_valid': True,
    }

    label, pos = _scan_label(line)

    pos = _skip_blanks(line, pos)
    opcode, pos = _scan_mnemonic(line, pos)
    operands = []
    if opcode is not None:
        operands, pos = _scan_operands(line, pos)

    pos = _skip_blanks(line, pos)
    comment, pos = _scan_comment(line, pos)

    if pos != len(line):
        fields['is_valid'] = False
        return fields

    fields['label'] = label
    fields['opcode'] = opcode
    fields['operands'] = operands
    fields['comment'] = comment
    return fields

# lexer.py v1.0
