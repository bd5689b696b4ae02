# Expressões

class Number:
    def __init__(self, value):
        self.value = value

class Variable:
    def __init__(self, name):
        self.name = name

class BinaryOp:
    def __init__(self, left, op, right):
        self.left = left
        self.op = op
        self.right = right

# Comandos

class RemStatement:
    def __init__(self, text='', line=None):
        self.text = text
        self.line = line

class LetStatement:
    def __init__(self, expr, line=None):
        self.expr = expr
        self.line = line

    @property
    def var(self):
        return self.expr.left.name

class PrintStatement:
    def __init__(self, expr, line=None):
        self.expr = expr
        self.line = line

class InputStatement:
    def __init__(self, var, line=None):
        self.var = var
        self.line = line

class EndStatement:
    def __init__(self, line=None):
        self.line = line

class GotoStatement:
    def __init__(self, target, line=None):
        self.target = target
        self.line = line

class IfStatement:
    def __init__(self, left, op, right, target, line=None):
        self.left = left
        self.op = op
        self.right = right
        self.target = target
        self.line = line
