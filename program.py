import bisect
import logging

logger = logging.getLogger(__name__)

# Marca tanto "não há linha" quanto o desvio de parada do END.
END_OF_PROGRAM = -1

class Program:
    """
    Armazena as linhas do programa ordenadas pelo número de linha.

    Cada linha guarda o texto original digitado (incluindo o número) e o
    comando já analisado. Também mantém o desvio de fluxo ("override")
    usado por GOTO, IF e END durante o RUN.
    """
    def __init__(self):
        self.source_lines = {}
        self.parsed = {}
        self.line_numbers = []
        self.next_line_override = None

    def clear(self):
        self.source_lines.clear()
        self.parsed.clear()
        self.line_numbers = []
        self.clear_next_line_override()

    def add_source_line(self, line_number, source):
        """Inclui ou substitui a linha; o comando antigo é descartado."""
        if line_number not in self.source_lines:
            bisect.insort(self.line_numbers, line_number)
        self.source_lines[line_number] = source
        self.parsed.pop(line_number, None)
        logger.debug("linha %d armazenada: %s", line_number, source)

    def remove_source_line(self, line_number):
        if self.source_lines.pop(line_number, None) is not None:
            self.line_numbers.remove(line_number)
            logger.debug("linha %d removida", line_number)
        self.parsed.pop(line_number, None)

    def get_source_line(self, line_number):
        return self.source_lines.get(line_number, '')

    def set_parsed_statement(self, line_number, statement):
        if line_number not in self.source_lines:
            raise KeyError(line_number)
        self.parsed[line_number] = statement

    def get_parsed_statement(self, line_number):
        return self.parsed.get(line_number)

    def first_line_number(self):
        if not self.line_numbers:
            return END_OF_PROGRAM
        return self.line_numbers[0]

    def next_line_number(self, line_number):
        idx = bisect.bisect_right(self.line_numbers, line_number)
        if idx == len(self.line_numbers):
            return END_OF_PROGRAM
        return self.line_numbers[idx]

    def has_line(self, line_number):
        return line_number in self.source_lines

    def lines(self):
        return [(number, self.source_lines[number]) for number in self.line_numbers]

    def __len__(self):
        return len(self.line_numbers)

    def __contains__(self, line_number):
        return self.has_line(line_number)

    # --- Desvio de fluxo ---

    def set_next_line_override(self, line_number):
        self.next_line_override = line_number

    def clear_next_line_override(self):
        self.next_line_override = None

    def resolve_next_line(self, default_next):
        if self.next_line_override is not None:
            return self.next_line_override
        return default_next
