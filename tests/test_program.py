import pytest

from basic_ast import EndStatement, RemStatement
from program import END_OF_PROGRAM, Program


def make_program(*numbers):
    program = Program()
    for number in numbers:
        program.add_source_line(number, f"{number} REM")
        program.set_parsed_statement(number, RemStatement())
    return program


def test_numeric_order_independent_of_insertion():
    program = make_program(30, 10, 20)
    assert program.first_line_number() == 10
    assert program.next_line_number(10) == 20
    assert program.next_line_number(20) == 30
    assert program.next_line_number(30) == END_OF_PROGRAM
    assert program.next_line_number(15) == 20
    assert [number for number, _ in program.lines()] == [10, 20, 30]


def test_empty_program_has_no_first_line():
    assert Program().first_line_number() == END_OF_PROGRAM


def test_replacing_source_drops_parsed_statement():
    program = make_program(10)
    program.add_source_line(10, "10 END")
    assert program.get_source_line(10) == "10 END"
    assert program.get_parsed_statement(10) is None
    assert len(program) == 1


def test_remove_line():
    program = make_program(10, 20)
    program.remove_source_line(10)
    program.remove_source_line(99)
    assert not program.has_line(10)
    assert program.get_parsed_statement(10) is None
    assert program.get_source_line(10) == ''
    assert program.first_line_number() == 20


def test_set_parsed_statement_requires_line():
    with pytest.raises(KeyError):
        Program().set_parsed_statement(10, EndStatement())


def test_override():
    program = make_program(10, 20)
    assert program.resolve_next_line(20) == 20
    program.set_next_line_override(END_OF_PROGRAM)
    assert program.resolve_next_line(20) == END_OF_PROGRAM
    program.clear_next_line_override()
    assert program.resolve_next_line(20) == 20


def test_clear():
    program = make_program(10, 20)
    program.set_next_line_override(10)
    program.clear()
    assert len(program) == 0
    assert program.resolve_next_line(5) == 5
