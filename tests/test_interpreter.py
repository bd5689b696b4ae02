import pytest

from console import BufferedConsole
from errors import BasicRuntimeError, LineNumberError
from interpreter import EvalState, Interpreter, RunState, parse_integer
from parser import Parser
from program import Program


def evaluate(text, **variables):
    state = EvalState()
    for name, value in variables.items():
        state.set_value(name, value)
    interpreter = Interpreter(Program(), state, BufferedConsole())
    expr = Parser.from_text(text).parse_expression(allow_assignment=True)
    return interpreter.evaluate(expr), state


def load(lines):
    program = Program()
    for line in lines:
        number, stmt = Parser.from_text(line).parse_numbered_line()
        program.add_source_line(number, line)
        program.set_parsed_statement(number, stmt)
    return program


@pytest.mark.parametrize("text, expected", [
    ("1 + 2 * 3", 7),
    ("(1 + 2) * 3", 9),
    ("10 - 4 - 3", 3),
    ("7 / 2", 3),
    ("0 - 7 / 2", -3),
    ("(0 - 7) / 2", -3),
    ("7 / (0 - 2)", -3),
    ("X * 2 + 1", 7),
])
def test_arithmetic(text, expected):
    assert evaluate(text, X=3)[0] == expected


def test_assignment_yields_value_and_stores():
    value, state = evaluate("A = B = 4 * 2")
    assert value == 8
    assert state.get_value("A") == 8
    assert state.get_value("B") == 8


def test_assignment_uses_pre_assignment_state():
    value, state = evaluate("X = X + 1", X=41)
    assert state.get_value("X") == 42


def test_undefined_variable():
    with pytest.raises(BasicRuntimeError) as info:
        evaluate("Y + 1")
    assert info.value.message == "VARIABLE NOT DEFINED"


def test_divide_by_zero():
    with pytest.raises(BasicRuntimeError) as info:
        evaluate("5 / (2 - 2)")
    assert info.value.message == "DIVIDE BY ZERO"


def test_eval_state():
    state = EvalState()
    state.set_value("A", 1)
    assert "A" in state and state.is_defined("A") and len(state) == 1
    assert state.as_dict() == {"A": 1}
    state.clear()
    assert len(state) == 0


def test_parse_integer():
    assert parse_integer(" 42 ") == 42
    assert parse_integer("-5") == -5
    assert parse_integer("+5") == 5
    assert parse_integer("4x") is None
    assert parse_integer("") is None
    assert parse_integer("1_000") is None


def test_run_program():
    console = BufferedConsole()
    program = load(["10 LET X = 3", "20 LET Y = X * 2 + 1", "30 PRINT Y", "40 END"])
    interpreter = Interpreter(program, console=console)
    interpreter.run()
    assert console.lines == ["7"]
    assert interpreter.status == RunState.STOPPED


def test_end_stops_before_later_lines():
    console = BufferedConsole()
    Interpreter(load(["10 PRINT 1", "20 END", "30 PRINT 2"]), console=console).run()
    assert console.lines == ["1"]


def test_goto_loop():
    console = BufferedConsole()
    program = load([
        "10 LET I = 0",
        "20 LET I = I + 1",
        "30 PRINT I",
        "40 IF I < 3 THEN 20",
    ])
    Interpreter(program, console=console).run()
    assert console.lines == ["1", "2", "3"]


def test_if_false_falls_through():
    console = BufferedConsole()
    Interpreter(load(["10 IF 1 = 2 THEN 40", "20 PRINT 20", "40 PRINT 40"]), console=console).run()
    assert console.lines == ["20", "40"]


def test_if_true_jumps():
    console = BufferedConsole()
    Interpreter(load(["10 IF 1 = 1 THEN 40", "20 PRINT 20", "40 PRINT 40"]), console=console).run()
    assert console.lines == ["40"]


def test_goto_missing_line_aborts_without_touching_state():
    console = BufferedConsole()
    interpreter = Interpreter(load(["10 LET A = 1", "20 GOTO 99", "30 LET A = 2"]), console=console)
    with pytest.raises(LineNumberError):
        interpreter.run()
    assert interpreter.state.get_value("A") == 1
    assert interpreter.status == RunState.STOPPED


def test_runtime_error_aborts_run():
    console = BufferedConsole()
    with pytest.raises(BasicRuntimeError):
        Interpreter(load(["10 PRINT 5 / 0", "20 PRINT 1"]), console=console).run()
    assert console.lines == []


def test_input_retries_on_invalid_number():
    console = BufferedConsole(["abc", "12"])
    interpreter = Interpreter(load(["10 INPUT N", "20 PRINT N"]), console=console)
    interpreter.run()
    assert console.lines == ["INVALID NUMBER", "12"]
    assert console.prompts == [" ? ", " ? "]


def test_input_at_end_of_input_leaves_variable_unset():
    interpreter = Interpreter(load(["10 INPUT N"]), console=BufferedConsole())
    interpreter.run()
    assert not interpreter.state.is_defined("N")


def test_missing_parsed_statement_is_reparsed():
    console = BufferedConsole()
    program = Program()
    program.add_source_line(10, "10 PRINT 3")
    Interpreter(program, console=console).run()
    assert console.lines == ["3"]
    assert program.get_parsed_statement(10) is not None


def test_step_limit_aborts_endless_loop():
    interpreter = Interpreter(load(["10 LET A = 1", "20 GOTO 10"]), console=BufferedConsole())
    with pytest.raises(BasicRuntimeError) as info:
        interpreter.run(max_steps=10)
    assert info.value.message == "STEP LIMIT EXCEEDED"
    assert interpreter.status == RunState.STOPPED


def test_step_limit_allows_program_that_fits():
    console = BufferedConsole()
    Interpreter(load(["10 PRINT 1", "20 PRINT 2"]), console=console).run(max_steps=2)
    assert console.lines == ["1", "2"]


def test_too_deep_expression_is_a_runtime_error():
    stmt = Parser.from_text("PRINT " + " + ".join(["1"] * 5000)).parse_statement()
    interpreter = Interpreter(Program(), console=BufferedConsole())
    with pytest.raises(BasicRuntimeError) as info:
        interpreter.execute(stmt)
    assert info.value.message == "EXPRESSION TOO COMPLEX"
