from io import StringIO

class Console:
    """Entrada e saída de linhas pelo terminal."""

    def read_line(self, prompt=''):
        """Retorna a linha lida, ou None no fim da entrada."""
        try:
            return input(prompt)
        except EOFError:
            return None

    def write_line(self, text):
        print(text)

class BufferedConsole(Console):
    """
    Console com entradas pré-definidas e saída acumulada em memória,
    usado pela API HTTP e pelos testes.
    """
    def __init__(self, inputs=None):
        self.input_stream = list(inputs or [])
        self.output_buffer = StringIO()
        self.prompts = []

    def read_line(self, prompt=''):
        self.prompts.append(prompt)
        if not self.input_stream:
            return None
        return str(self.input_stream.pop(0))

    def write_line(self, text):
        self.output_buffer.write(f"{text}\n")

    def getvalue(self):
        return self.output_buffer.getvalue()

    @property
    def lines(self):
        return self.getvalue().splitlines()
