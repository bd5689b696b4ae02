import logging

from console import Console
from errors import BasicError, QuitSignal
from interpreter import EvalState, Interpreter
from lexer import Lexer, TokenType
from parser import Parser
from program import Program

logger = logging.getLogger(__name__)

COMMANDS = ('LIST', 'RUN', 'CLEAR', 'QUIT')

class BasicSession:
    """
    Programa armazenado + estado das variáveis de uma sessão, com as
    operações usadas pelo REPL e pela API.
    """
    def __init__(self, console=None, max_steps=None, **lexer_options):
        self.program = Program()
        self.max_steps = max_steps
        self.state = EvalState()
        self.console = console or Console()
        self.lexer_options = lexer_options

    def _parser(self, text):
        return Parser(Lexer(text, **self.lexer_options))

    def _interpreter(self):
        return Interpreter(self.program, self.state, self.console, self.lexer_options)

    def store_line(self, number, text, source=None):
        """Analisa o comando antes de mexer no programa; só grava se for válido."""
        parser = self._parser(text)
        stmt = parser.parse_statement(line=number)
        self.program.add_source_line(number, source if source is not None else f"{number} {text}")
        self.program.set_parsed_statement(number, stmt)

    def delete_line(self, number):
        self.program.remove_source_line(number)

    def list_lines(self):
        return self.program.lines()

    def run(self):
        self._interpreter().run(self.max_steps)

    def clear_all(self):
        self.program.clear()
        self.state.clear()
        logger.debug("programa e variáveis apagados")

    def run_immediate(self, text):
        stmt = self._parser(text).parse_statement(immediate=True)
        self._interpreter().execute(stmt)

    def process_line(self, line):
        """Trata uma linha digitada no modo imediato."""
        parser = self._parser(line)
        first = parser.current_token
        if first.type == TokenType.EOF:
            return

        if parser.kind(first) == TokenType.NUMBER:
            number, stmt = parser.parse_numbered_line()
            if stmt is None:
                self.delete_line(number)
            else:
                self.program.add_source_line(number, line)
                self.program.set_parsed_statement(number, stmt)
            return

        if parser.kind(first) == TokenType.WORD and first.value in COMMANDS:
            parser.advance()
            parser.expect_end()
            if first.value == 'LIST':
                for _, source in self.list_lines():
                    self.console.write_line(source)
            elif first.value == 'RUN':
                self.run()
            elif first.value == 'CLEAR':
                self.clear_all()
            else:
                raise QuitSignal()
            return

        stmt = parser.parse_statement(immediate=True)
        self._interpreter().execute(stmt)

def repl(session):
    """Lê linhas até o fim da entrada ou QUIT, exibindo as mensagens de erro."""
    while True:
        line = session.console.read_line()
        if line is None:
            break
        if not line:
            continue
        try:
            session.process_line(line)
        except QuitSignal:
            break
        except BasicError as e:
            session.console.write_line(e.message)
