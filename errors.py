class BasicError(Exception):
    """Erro base do interpretador; a mensagem é o texto exibido ao usuário."""
    default_message = "ERROR"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

class BasicSyntaxError(BasicError):
    default_message = "SYNTAX ERROR"

    def __init__(self, message=None, column=None):
        super().__init__(message)
        self.column = column

class LineNumberError(BasicError):
    default_message = "LINE NUMBER ERROR"

class BasicRuntimeError(BasicError):
    default_message = "RUNTIME ERROR"

class QuitSignal(Exception):
    pass
