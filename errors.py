class KubefnError(Exception):
    stage = "Compile"

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def format(self, indent: str = "") -> str:
        return f"{indent}{self.stage} error: {self}"

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} at line {self.line}"
        return f"{self.message} at line {self.line}, col {self.column}"


class LexError(KubefnError):
    stage = "Lex"

    def __init__(self, message: str, line: int | None = None, column: int | None = None, internal: bool = False):
        super().__init__(message, line, column)
        # True when a rule's extract pattern disagrees with its match pattern
        self.internal = internal


class ParseError(KubefnError):
    stage = "Parse"


class SemanticError(KubefnError):
    stage = "Semantic"


class GenerationError(KubefnError):
    stage = "Build"
