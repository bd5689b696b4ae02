import logging
import re
from enum import Enum, auto

from basic_ast import *
from console import Console
from errors import BasicRuntimeError, LineNumberError
from parser import Parser
from program import END_OF_PROGRAM

logger = logging.getLogger(__name__)

INPUT_PROMPT = ' ? '
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')

class RunState(Enum):
    IDLE = auto()
    RUNNING = auto()
    STOPPED = auto()

class EvalState:
    """Mapeamento nome de variável -> valor inteiro de uma sessão."""
    def __init__(self):
        self.variables = {}

    def set_value(self, name, value):
        self.variables[name] = value

    def get_value(self, name):
        if name not in self.variables:
            raise BasicRuntimeError("VARIABLE NOT DEFINED")
        return self.variables[name]

    def is_defined(self, name):
        return name in self.variables

    def clear(self):
        self.variables.clear()

    def as_dict(self):
        return dict(self.variables)

    def __contains__(self, name):
        return name in self.variables

    def __len__(self):
        return len(self.variables)

def parse_integer(text):
    text = text.strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)

class Interpreter:
    def __init__(self, program, state=None, console=None, lexer_options=None):
        self.program = program
        self.state = state if state is not None else EvalState()
        self.console = console or Console()
        self.lexer_options = lexer_options or {}
        self.status = RunState.IDLE

    # --- Expressões ---

    def evaluate(self, expr):
        if isinstance(expr, Number):
            return expr.value
        elif isinstance(expr, Variable):
            return self.state.get_value(expr.name)
        elif isinstance(expr, BinaryOp):
            if expr.op == '=':
                value = self.evaluate(expr.right)
                self.state.set_value(expr.left.name, value)
                return value

            left_val = self.evaluate(expr.left)
            right_val = self.evaluate(expr.right)

            if expr.op == '+': return left_val + right_val
            if expr.op == '-': return left_val - right_val
            if expr.op == '*': return left_val * right_val
            if expr.op == '/':
                if right_val == 0:
                    raise BasicRuntimeError("DIVIDE BY ZERO")
                # Divisão inteira truncada em direção a zero.
                quotient = abs(left_val) // abs(right_val)
                return quotient if (left_val < 0) == (right_val < 0) else -quotient
            raise BasicRuntimeError(f"UNKNOWN OPERATOR {expr.op}")
        else:
            raise BasicRuntimeError(f"INVALID EXPRESSION {type(expr).__name__}")

    def _evaluate_condition(self, left, op, right):
        left_val = self.evaluate(left)
        right_val = self.evaluate(right)

        if op == '=': return left_val == right_val
        if op == '<': return left_val < right_val
        if op == '>': return left_val > right_val
        raise BasicRuntimeError(f"UNKNOWN OPERATOR {op}")

    # --- Comandos ---

    def _jump(self, target):
        if not self.program.has_line(target):
            raise LineNumberError()
        self.program.set_next_line_override(target)

    def _read_input(self, stmt):
        # Repete até receber um inteiro; no fim da entrada desiste sem atribuir.
        while True:
            line = self.console.read_line(INPUT_PROMPT)
            if line is None:
                return
            value = parse_integer(line)
            if value is not None:
                self.state.set_value(stmt.var, value)
                return
            self.console.write_line("INVALID NUMBER")

    def execute(self, stmt):
        try:
            self._execute(stmt)
        except RecursionError:
            raise BasicRuntimeError("EXPRESSION TOO COMPLEX") from None

    def _execute(self, stmt):
        if isinstance(stmt, RemStatement):
            pass

        elif isinstance(stmt, LetStatement):
            self.evaluate(stmt.expr)

        elif isinstance(stmt, PrintStatement):
            self.console.write_line(str(self.evaluate(stmt.expr)))

        elif isinstance(stmt, InputStatement):
            self._read_input(stmt)

        elif isinstance(stmt, EndStatement):
            self.program.set_next_line_override(END_OF_PROGRAM)

        elif isinstance(stmt, GotoStatement):
            self._jump(stmt.target)

        elif isinstance(stmt, IfStatement):
            if self._evaluate_condition(stmt.left, stmt.op, stmt.right):
                self._jump(stmt.target)

        else:
            raise BasicRuntimeError(f"UNKNOWN STATEMENT {type(stmt).__name__}")

    # --- Execução do programa ---

    def _reparse(self, line_number):
        source = self.program.get_source_line(line_number)
        _, stmt = Parser.from_text(source, **self.lexer_options).parse_numbered_line()
        self.program.set_parsed_statement(line_number, stmt)
        return stmt

    def run(self, max_steps=None):
        """
        Percorre o programa a partir da primeira linha. Depois de cada
        comando a próxima linha é o desvio, se houver, ou a sucessora
        natural. Qualquer erro interrompe a execução inteira.

        Com max_steps, a execução é abortada depois desse número de
        comandos executados.
        """
        current = self.program.first_line_number()
        steps = 0
        self.status = RunState.RUNNING
        logger.debug("RUN iniciado na linha %d", current)
        try:
            while current != END_OF_PROGRAM:
                stmt = self.program.get_parsed_statement(current)
                if stmt is None:
                    stmt = self._reparse(current)
                self.program.clear_next_line_override()
                default_next = self.program.next_line_number(current)
                self.execute(stmt)
                current = self.program.resolve_next_line(default_next)
                steps += 1
                if max_steps is not None and steps >= max_steps and current != END_OF_PROGRAM:
                    raise BasicRuntimeError("STEP LIMIT EXCEEDED")
        except Exception:
            logger.debug("RUN interrompido na linha %d", current)
            raise
        finally:
            self.program.clear_next_line_override()
            self.status = RunState.STOPPED
        logger.debug("RUN terminado")
