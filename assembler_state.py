# assembler_state.py v1.0
"""
Manages the state of the assembler during passes: which pass is running,
the Location Counter (address of the next instruction) and the line being
processed.

Pass sequence:
    SCANNING_SYMBOLS -> ENCODING_INSTRUCTIONS -> DONE
Pass 2 only starts when Pass 1 finished without errors. Any fatal error,
or the end of the source in Pass 2, moves the state to DONE.
"""
from enum import Enum
from typing import Optional

INSTRUCTION_SIZE = 4


class PassState(Enum):
    SCANNING_SYMBOLS = 1
    ENCODING_INSTRUCTIONS = 2
    DONE = 3


class AssemblerState:
    """Tracks the assembler's current state."""
    def __init__(self):
        self.pass_state: Optional[PassState] = None
        self.location_counter: int = 0
        self.current_line_number: int = 0
        self.instruction_count: int = 0
        self.debug_mode = False

    @property
    def pass_number(self) -> int:
        if self.pass_state is PassState.SCANNING_SYMBOLS: return 1
        if self.pass_state is PassState.ENCODING_INSTRUCTIONS: return 2
        return 0

    def set_pass(self, pass_num):
        """ Enters Pass 1 or Pass 2 with the counters reset to the start of the source. """
        if pass_num == 1:
            self.pass_state = PassState.SCANNING_SYMBOLS
        elif pass_num == 2:
            if self.pass_state is not PassState.SCANNING_SYMBOLS:
                raise RuntimeError(f"Pass 2 cannot start from state {self.pass_state}")
            self.pass_state = PassState.ENCODING_INSTRUCTIONS
        else:
            raise ValueError(f"Invalid pass number {pass_num}")
        self.location_counter = 0
        self.current_line_number = 0
        self.instruction_count = 0

    def finish(self):
        self.pass_state = PassState.DONE

    def advance_lc(self) -> int:
        """ Allocates the next instruction. Returns its address. """
        address = self.location_counter
        self.location_counter += INSTRUCTION_SIZE
        self.instruction_count += 1
        if self.debug_mode:
            print(f">>> DEBUG LC: L{self.current_line_number} Instruction at {address:#010x}, next LC={self.location_counter:#010x}")
        return address

# assembler_state.py v1.0
