class ASTNode:
    # Optional source line (1-based). Parser may set this.
    line: int | None = None


class Program(ASTNode):
    # bare statement list, no enclosing function
    def __init__(self, statements):
        self.statements = statements


class FunctionDef(ASTNode):
    def __init__(self, name, params, body):
        self.name = name
        self.params = params  # list[str]
        self.body = body      # list of statement nodes


class Call(ASTNode):
    def __init__(self, name, args):
        self.name = name
        self.args = args


class VarAssign(ASTNode):
    def __init__(self, name, value):
        self.name = name    # without the $ sigil
        self.value = value  # StringLiteral | Prompt | Call


class VarRef(ASTNode):
    def __init__(self, name):
        self.name = name


class StringLiteral(ASTNode):
    def __init__(self, value):
        self.value = value


class Prompt(ASTNode):
    # the `ask` keyword: one line of interactive input
    pass
