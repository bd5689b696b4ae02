from lexer import Lexer, TokenType
from basic_ast import *
from errors import BasicSyntaxError

KEYWORDS = frozenset((
    'REM', 'LET', 'PRINT', 'INPUT', 'END', 'GOTO', 'IF', 'THEN',
    'RUN', 'LIST', 'CLEAR', 'QUIT', 'HELP',
))
PROGRAM_STATEMENTS = ('REM', 'LET', 'PRINT', 'INPUT', 'END', 'GOTO', 'IF')
IMMEDIATE_STATEMENTS = ('LET', 'PRINT', 'INPUT')
RELATIONAL_OPERATORS = ('=', '<', '>')

class Parser:
    def __init__(self, lexer):
        self.lexer = lexer
        self.current_token = self._next()

    @classmethod
    def from_text(cls, text, **options):
        return cls(Lexer(text, **options))

    def _next(self):
        token = self.lexer.next_token()
        while token.type == TokenType.WHITESPACE:
            token = self.lexer.next_token()
        return token

    def advance(self):
        self.current_token = self._next()

    def peek(self):
        token = self.lexer.peek_token()
        while token.type == TokenType.WHITESPACE:
            self.lexer.next_token()
            token = self.lexer.peek_token()
        return token

    def error(self, token=None):
        token = token or self.current_token
        raise BasicSyntaxError(column=token.column)

    def at_end(self):
        return self.current_token.type == TokenType.EOF

    def expect(self, value):
        if self.current_token.value != value:
            self.error()
        token = self.current_token
        self.advance()
        return token

    def expect_end(self):
        if not self.at_end():
            self.error()

    def kind(self, token):
        # A classificação depende só do texto, não da configuração do scanner.
        return Lexer.token_type(token.value)

    def is_identifier(self, token):
        return (self.kind(token) == TokenType.WORD
                and not token.value[0].isdigit()
                and token.value not in KEYWORDS)

    def parse_line_number(self):
        token = self.current_token
        if self.kind(token) != TokenType.NUMBER:
            self.error()
        self.advance()
        return int(token.value)

    # --- Expressões ---

    def parse_expression(self, allow_assignment=False):
        """
        assignExpr := IDENTIFIER '=' assignExpr | addExpr

        O '=' só vira atribuição quando o chamador permite (LET); nos
        demais contextos ele sobra como token e a linha é rejeitada.
        """
        token = self.current_token
        if allow_assignment and self.is_identifier(token) and self.peek().value == '=':
            self.advance()
            self.advance()
            value = self.parse_expression(allow_assignment)
            return BinaryOp(Variable(token.value), '=', value)
        return self.parse_additive(allow_assignment)

    def parse_additive(self, allow_assignment):
        node = self.parse_term(allow_assignment)
        while self.current_token.type == TokenType.OPERATOR and self.current_token.value in ('+', '-'):
            op = self.current_token.value
            self.advance()
            node = BinaryOp(node, op, self.parse_term(allow_assignment))
        return node

    def parse_term(self, allow_assignment):
        node = self.parse_primary(allow_assignment)
        while self.current_token.type == TokenType.OPERATOR and self.current_token.value in ('*', '/'):
            op = self.current_token.value
            self.advance()
            node = BinaryOp(node, op, self.parse_primary(allow_assignment))
        return node

    def parse_primary(self, allow_assignment):
        token = self.current_token
        if self.kind(token) == TokenType.NUMBER:
            self.advance()
            return Number(int(token.value))
        if self.is_identifier(token):
            self.advance()
            return Variable(token.value)
        if token.value == '(':
            self.advance()
            node = self.parse_expression(allow_assignment)
            self.expect(')')
            return node
        self.error()

    def _parse_group(self, values):
        """Reanalisa um grupo de tokens do IF como expressão independente."""
        sub = Parser(Lexer(' '.join(values), **self.lexer.options))
        expr = sub.parse_expression()
        sub.expect_end()
        return expr

    def _collect_until(self, is_boundary):
        values = []
        depth = 0
        while True:
            token = self.current_token
            if token.type == TokenType.EOF:
                self.error()
            if depth == 0 and is_boundary(token):
                return values
            if token.value == '(':
                depth += 1
            elif token.value == ')':
                depth -= 1
                if depth < 0:
                    self.error()
            values.append(token.value)
            self.advance()

    # --- Comandos ---

    def parse_statement(self, immediate=False, line=None):
        try:
            return self._parse_statement(immediate, line)
        except RecursionError:
            # Expressão aninhada demais para o parser recursivo.
            raise BasicSyntaxError(column=self.current_token.column) from None

    def _parse_statement(self, immediate, line):
        token = self.current_token
        allowed = IMMEDIATE_STATEMENTS if immediate else PROGRAM_STATEMENTS
        if self.kind(token) != TokenType.WORD or token.value not in allowed:
            self.error()
        keyword = token.value

        if keyword == 'REM':
            # O comentário não passa pelo scanner.
            text = self.lexer.rest()
            self.current_token = self._next()
            return RemStatement(text, line)

        self.advance()

        if keyword == 'LET':
            expr = self.parse_expression(allow_assignment=True)
            if not (isinstance(expr, BinaryOp) and expr.op == '='):
                self.error(token)
            self.expect_end()
            return LetStatement(expr, line)

        elif keyword == 'PRINT':
            expr = self.parse_expression()
            self.expect_end()
            return PrintStatement(expr, line)

        elif keyword == 'INPUT':
            var = self.current_token
            if not self.is_identifier(var):
                self.error()
            self.advance()
            self.expect_end()
            return InputStatement(var.value, line)

        elif keyword == 'END':
            self.expect_end()
            return EndStatement(line)

        elif keyword == 'GOTO':
            target = self.parse_line_number()
            self.expect_end()
            return GotoStatement(target, line)

        else:
            left_values = self._collect_until(
                lambda t: t.type == TokenType.OPERATOR and t.value in RELATIONAL_OPERATORS)
            op = self.current_token.value
            self.advance()
            right_values = self._collect_until(
                lambda t: self.kind(t) == TokenType.WORD and t.value == 'THEN')
            self.advance()
            left = self._parse_group(left_values)
            right = self._parse_group(right_values)
            target = self.parse_line_number()
            self.expect_end()
            return IfStatement(left, op, right, target, line)

    def parse_numbered_line(self):
        """
        Analisa '<número> [comando]'. Retorna (número, comando), com
        comando None quando a linha tem só o número (remoção).
        """
        number = self.parse_line_number()
        if self.at_end():
            return number, None
        return number, self.parse_statement(line=number)
