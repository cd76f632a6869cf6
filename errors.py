# errors.py v1.0
"""
Error reporting classes for the MIPS assembler.
Includes the single tagged exception type used by every pass.
"""

import sys
from enum import Enum

# --- Error kinds ---

class ErrorKind(Enum):
    """One member per fatal condition. The value is the listing error code."""
    INVALID_LINE = 'S'
    UNKNOWN_INSTRUCTION = 'I'
    UNKNOWN_REGISTER = 'R'
    MALFORMED_FORMAT = 'O'
    MALFORMED_LITERAL = 'N'
    UNDEFINED_SYMBOL = 'U'
    DUPLICATE_SYMBOL = 'L'
    FIELD_OVERFLOW = 'V'
    IO = 'F'


# --- Custom Exceptions ---

class AsmException(Exception):
    """Assembler error that stops the current pass."""
    def __init__(self, kind, message, line_num=None, token=None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.line_num = line_num
        self.token = token

    @property
    def code(self):
        return self.kind.value

    def __str__(self):
        prefix = f"L{self.line_num}: " if self.line_num else ""
        return f"{prefix}{self.message} [{self.code}]"


# --- Error Reporter Class ---

class ErrorReporter:
    """Handles collection and reporting of errors."""
    def __init__(self):
        self.errors = []

    def has_errors(self):
        return bool(self.errors)

    def add_error(self, message, line_num=None, code='E'):
        """Adds an error message."""
        self.errors.append({'message': message, 'line_num': line_num, 'code': code})

    def add_exception(self, exc):
        """Records an AsmException raised by one of the passes."""
        self.add_error(exc.message, exc.line_num, code=exc.code)

    def print_summary(self):
        """Prints all collected errors."""
        if self.errors:
            print("\n--- Errors ---", file=sys.stderr)
            for error in sorted(self.errors, key=lambda x: x['line_num'] or 0):
                line_prefix = f"L{error['line_num']}: " if error['line_num'] else ""
                print(f"{line_prefix}{error['message']} [{error['code']}]", file=sys.stderr)

        print(f"\nTotal Errors: {len(self.errors)}")

# errors.py v1.0
