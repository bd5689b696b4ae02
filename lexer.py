from dataclasses import dataclass
from enum import Enum, auto

from errors import BasicSyntaxError

class TokenType(Enum):
    NUMBER = auto()
    WORD = auto()
    OPERATOR = auto()
    WHITESPACE = auto()
    EOF = auto()

OPERATORS = '+-*/()=<>'
DIGITS = '0123456789'

@dataclass
class Token:
    type: TokenType
    value: str
    column: int

class Lexer:
    """
    Scanner preguiçoso sobre uma única linha de BASIC.

    Os tokens só são produzidos quando pedidos, de modo que um caractere
    inválido só gera erro quando o cursor chega nele (um REM pode conter
    qualquer texto).
    """
    def __init__(self, source, ignore_whitespace=True, scan_numbers=True):
        self.source = source
        self.ignore_whitespace = ignore_whitespace
        self.scan_numbers = scan_numbers
        self.pos = 0
        self.current_char = self.source[0] if source else None
        self._saved = None

    @property
    def options(self):
        return {'ignore_whitespace': self.ignore_whitespace, 'scan_numbers': self.scan_numbers}

    def advance(self):
        self.pos += 1
        if self.pos < len(self.source):
            self.current_char = self.source[self.pos]
        else:
            self.current_char = None

    def skip_whitespace(self):
        while self.current_char and self.current_char.isspace():
            self.advance()

    def number(self):
        start_pos = self.pos
        while self.current_char and self.current_char in DIGITS:
            self.advance()
        return self.source[start_pos:self.pos]

    def word(self):
        start_pos = self.pos
        while self.current_char and (self.current_char.isalnum() or self.current_char == '_'):
            self.advance()
        return self.source[start_pos:self.pos]

    def _scan(self):
        if self.ignore_whitespace:
            self.skip_whitespace()

        column = self.pos + 1
        if self.current_char is None:
            return Token(TokenType.EOF, '', column)

        if self.current_char.isspace():
            start_pos = self.pos
            self.skip_whitespace()
            return Token(TokenType.WHITESPACE, self.source[start_pos:self.pos], column)

        if self.current_char in DIGITS:
            if self.scan_numbers:
                return Token(TokenType.NUMBER, self.number(), column)
            return Token(TokenType.WORD, self.word(), column)

        if self.current_char.isalpha() or self.current_char == '_':
            return Token(TokenType.WORD, self.word(), column)

        if self.current_char in OPERATORS:
            op = self.current_char
            self.advance()
            return Token(TokenType.OPERATOR, op, column)

        raise BasicSyntaxError(column=column)

    def next_token(self):
        if self._saved is not None:
            token, self._saved = self._saved, None
            return token
        return self._scan()

    def peek_token(self):
        if self._saved is None:
            self._saved = self._scan()
        return self._saved

    def has_more_tokens(self):
        return self.peek_token().type != TokenType.EOF

    def rest(self):
        """Consome o restante da linha sem analisá-lo."""
        if self._saved is not None:
            start = self._saved.column - 1
            self._saved = None
        else:
            start = self.pos
        text = self.source[start:]
        self.pos = len(self.source)
        self.current_char = None
        return text.strip()

    def tokenize(self):
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    @staticmethod
    def token_type(text):
        if not text:
            return TokenType.EOF
        if text.isspace():
            return TokenType.WHITESPACE
        if all(c in DIGITS for c in text):
            return TokenType.NUMBER
        if text[0].isalpha() or text[0] == '_':
            return TokenType.WORD
        return TokenType.OPERATOR
