import pytest

from errors import AsmException, ErrorKind
from instruction_assembler import Field, Instruction, assemble_instruction
from instruction_table import InstructionTable, OPCODES, REGISTER_NAMES, R_FORMAT


@pytest.fixture(scope="module")
def table():
    return InstructionTable()


def encode(table, mnemonic, operands, address=0):
    return assemble_instruction(mnemonic, address, operands, table, line_num=1).to_int()


@pytest.mark.parametrize("mnemonic, operands, address, word", [
    ("add", ["$t0", "$t1", "$t2"], 0, 0x012A4020),
    ("sub", ["$s0", "$s1", "$s2"], 0, 0x02328022),
    ("and", ["$t0", "$t1", "$t2"], 0, 0x012A4024),
    ("or", ["$t0", "$t1", "$t2"], 0, 0x012A4025),
    ("nor", ["$t0", "$t1", "$t2"], 0, 0x012A4027),
    ("slt", ["$t0", "$t1", "$t2"], 0, 0x012A402A),
    ("sll", ["$t0", "$t1", "4"], 0, 0x00094100),
    ("jr", ["$ra"], 0, 0x03E00008),
    ("nop", [], 0, 0x00000000),
    ("lw", ["$t0", "4", "$sp"], 0, 0x8FA80004),
    ("sw", ["$ra", "-8", "$sp"], 0, 0xAFBFFFF8),
    ("addi", ["$t0", "$t0", "-1"], 0, 0x2108FFFF),
    ("addi", ["$t0", "$zero", "0x7fff"], 0, 0x20087FFF),
    ("beq", ["$t0", "$t1", "16"], 4, 0x11090002),
    ("beq", ["$t0", "$t1", "0"], 8, 0x1109FFFD),
    ("j", ["0x100"], 0, 0x08000040),
    ("j", ["256"], 0x40, 0x08000040),
])
def test_encoding(table, mnemonic, operands, address, word):
    assert encode(table, mnemonic, operands, address) == word


def test_every_r_format_mnemonic_has_a_func_code(table):
    for mnemonic in OPCODES:
        assert table.get_opcode(mnemonic) is not None
        if table.get_format(mnemonic) == R_FORMAT:
            assert table.get_func_code(mnemonic) is not None


def test_field_widths():
    assert Field('op', 0).width == 6
    assert Field('func', 0).width == 6
    assert Field('immediate', 0).width == 16
    assert Field('address', 0).width == 26
    for name in ('rs', 'rt', 'rd', 'sa'):
        assert Field(name, 0).width == 5


def test_r_format_field_order(table):
    instruction = assemble_instruction("add", 0, ["$t0", "$t1", "$t2"], table)
    assert [f.name for f in instruction.fields] == ['op', 'rs', 'rt', 'rd', 'sa', 'func']
    assert str(instruction) == "op:0 rs:9 rt:10 rd:8 sa:0 func:32"


def test_i_and_j_format_field_order(table):
    lw = assemble_instruction("lw", 0, ["$t0", "4", "$sp"], table)
    assert [f.name for f in lw.fields] == ['op', 'rs', 'rt', 'immediate']
    j = assemble_instruction("j", 0, ["0"], table)
    assert [f.name for f in j.fields] == ['op', 'address']


def test_packing_puts_first_field_on_top():
    instruction = Instruction("x", 0, [Field('op', 0x3F), Field('address', 0)])
    assert instruction.to_int() == 0xFC000000


def test_every_canonical_register_encodes(table):
    for number, name in enumerate(REGISTER_NAMES):
        word = encode(table, "jr", [name])
        assert word >> 21 == number


def assert_error(table, kind, mnemonic, operands, address=0):
    with pytest.raises(AsmException) as exc_info:
        assemble_instruction(mnemonic, address, operands, table, line_num=5).to_int()
    assert exc_info.value.kind is kind
    assert exc_info.value.line_num == 5
    return exc_info.value


@pytest.mark.parametrize("mnemonic", ["mul", "ADD", "li", "move"])
def test_unknown_instruction(table, mnemonic):
    exc = assert_error(table, ErrorKind.UNKNOWN_INSTRUCTION, mnemonic, ["$t0"])
    assert exc.token == mnemonic


@pytest.mark.parametrize("mnemonic, operands, bad", [
    ("add", ["$t0", "$zz", "$t2"], "$zz"),
    ("jr", ["$5"], "$5"),
    ("lw", ["$t0", "4", "$foo"], "$foo"),
    ("beq", ["t0", "$t1", "8"], "t0"),
])
def test_unknown_register(table, mnemonic, operands, bad):
    exc = assert_error(table, ErrorKind.UNKNOWN_REGISTER, mnemonic, operands)
    assert exc.token == bad
    assert exc.message == f'Unknown register "{bad}"'


@pytest.mark.parametrize("mnemonic, operands", [
    ("add", ["$t0", "$t1"]),
    ("sll", ["$t0", "$t1"]),
    ("jr", []),
    ("lw", ["$t0", "4"]),
    ("addi", ["$t0", "$t1"]),
    ("beq", ["$t0", "$t1"]),
    ("j", []),
])
def test_too_few_arguments(table, mnemonic, operands):
    exc = assert_error(table, ErrorKind.MALFORMED_FORMAT, mnemonic, operands)
    assert "too few" in exc.message


@pytest.mark.parametrize("mnemonic, operands", [
    ("jr", ["$ra", "$t0"]),
    ("nop", ["$t0"]),
    ("j", ["4", "8"]),
    ("lw", ["$t0", "4", "$sp", "$t1"]),
    ("addi", ["$t0", "$t0", "1", "2"]),
])
def test_too_many_arguments(table, mnemonic, operands):
    exc = assert_error(table, ErrorKind.MALFORMED_FORMAT, mnemonic, operands)
    assert "too many" in exc.message


def test_too_few_is_reported_before_unknown_register(table):
    assert_error(table, ErrorKind.MALFORMED_FORMAT, "add", ["$zz", "$t1"])


def test_unknown_instruction_is_reported_before_argument_count(table):
    assert_error(table, ErrorKind.UNKNOWN_INSTRUCTION, "foo", ["$t0", "$t1", "$t2", "$t3"])


@pytest.mark.parametrize("mnemonic, operands", [
    ("addi", ["$t0", "$t0", "abc"]),
    ("lw", ["$t0", "4($zz)", "$sp"]),
    ("sll", ["$t0", "$t1", "four"]),
    ("beq", ["$t0", "$t1", "09"]),
    ("j", ["0xZZ"]),
])
def test_malformed_literal(table, mnemonic, operands):
    assert_error(table, ErrorKind.MALFORMED_LITERAL, mnemonic, operands)


@pytest.mark.parametrize("value", ["32767", "-32768"])
def test_immediate_range_limits(table, value):
    encode(table, "addi", ["$t0", "$t0", value])


@pytest.mark.parametrize("mnemonic, operands, address", [
    ("addi", ["$t0", "$t0", "100000"], 0),
    ("addi", ["$t0", "$t0", "32768"], 0),
    ("addi", ["$t0", "$t0", "-32769"], 0),
    ("lw", ["$t0", "0x8000", "$sp"], 0),
    ("beq", ["$t0", "$t1", "0x40000"], 0),
    ("sll", ["$t0", "$t1", "32"], 0),
    ("j", ["0x10000000"], 0),
    ("j", ["-4"], 0),
])
def test_field_overflow(table, mnemonic, operands, address):
    exc = assert_error(table, ErrorKind.FIELD_OVERFLOW, mnemonic, operands, address)
    assert "does not fit" in exc.message


def test_largest_jump_target(table):
    assert encode(table, "j", ["0x0FFFFFFC"]) == 0x0BFFFFFF


def test_longest_backward_branch(table):
    # (0 - (0x1FFFC + 4)) >> 2 == -0x8000
    assert encode(table, "beq", ["$zero", "$zero", "0"], address=0x1FFFC) == 0x10008000
