from ast_nodes import FunctionDef, Call, VarAssign, VarRef, StringLiteral, Prompt
from errors import ParseError, SemanticError


class Parser:
    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.pos = 0
        # every $NAME assigned so far; flat, no nested scopes
        self.variables = set()
        self.params = set()

    # remove the next token, but only if it is the kind we expect
    def consume(self, kind):
        if self.pos >= len(self.tokens):
            raise ParseError(f"Expected {kind}, got end of input", *self._last_position())
        tok = self.tokens[self.pos]
        if tok.kind != kind:
            raise ParseError(f"Expected {kind}, got {tok.kind}", tok.line, tok.column)
        self.pos += 1
        return tok

    def peek(self, kind, offset=0):
        idx = self.pos + offset
        if idx >= len(self.tokens):
            raise ParseError(f"Unexpected end of input while looking for {kind}", *self._last_position())
        return self.tokens[idx].kind == kind

    def at_end(self):
        return self.pos >= len(self.tokens)

    def current(self):
        if self.at_end():
            return None
        return self.tokens[self.pos]

    def error_here(self, message):
        tok = self.current()
        if tok is None:
            raise ParseError(f"{message}, got end of input", *self._last_position())
        raise ParseError(f"{message} {tok!r}", tok.line, tok.column)

    def _last_position(self):
        if not self.tokens:
            return (None, None)
        last = self.tokens[-1]
        return (last.line, last.column)

    # ---------- TOP LEVEL ----------
    def parse(self):
        node = self.parse_func_def()
        if not self.at_end():
            self.error_here("Unexpected token after function body")
        return node

    def parse_func_def(self):
        tok = self.consume("FUNC")
        name = self.consume("IDENT").text
        params = self.parse_func_def_params()
        body = self.parse_func_def_body()
        node = FunctionDef(name, params, body)
        node.line = tok.line
        return node

    def parse_func_def_params(self):
        self.consume("LPAREN")
        params = []

        if self.peek("RPAREN"):
            self.consume("RPAREN")
            return params

        params.append(self.consume("IDENT").text)
        while self.peek("COMMA"):
            self.consume("COMMA")
            params.append(self.consume("IDENT").text)
        self.consume("RPAREN")
        # readable as $NAME in the body, but never counted as an assignment
        self.params.update(params)
        return params

    def parse_func_def_body(self):
        self.consume("LBRACE")
        expressions = []
        while not self.peek("RBRACE"):
            expressions.append(self.parse_expression())
        self.consume("RBRACE")
        return expressions

    # ---------- EXPRESSIONS ----------
    def parse_expression(self):
        if self.peek("STRING"):
            return self.parse_string()
        if self.peek("IDENT") and self.peek("LPAREN", 1):
            return self.parse_call()
        if self.peek("VAR"):
            if self.peek("EQUALS", 1):
                return self.parse_var_assign()
            return self.parse_var_ref()
        self.error_here("Unknown expression")

    def parse_var_assign(self):
        tok = self.consume("VAR")
        self.consume("EQUALS")

        if tok.text in self.variables:
            raise SemanticError(f"Already have defined variable {tok.text}", tok.line, tok.column)

        # right side is never a bare $VAR, so no aliasing
        if self.peek("STRING"):
            value = self.parse_string()
        elif self.peek("ASK"):
            value = self.parse_prompt()
        elif self.peek("IDENT") and self.peek("LPAREN", 1):
            value = self.parse_call()
        else:
            self.error_here("Unknown assignment type")

        self.variables.add(tok.text)
        node = VarAssign(tok.text, value)
        node.line = tok.line
        return node

    def parse_var_ref(self):
        tok = self.consume("VAR")
        if tok.text not in self.variables and tok.text not in self.params:
            raise SemanticError(f"A variable named {tok.text} has not been set", tok.line, tok.column)
        node = VarRef(tok.text)
        node.line = tok.line
        return node

    def parse_string(self):
        tok = self.consume("STRING")
        node = StringLiteral(tok.text)
        node.line = tok.line
        return node

    def parse_prompt(self):
        tok = self.consume("ASK")
        node = Prompt()
        node.line = tok.line
        return node

    def parse_call(self):
        tok = self.consume("IDENT")
        args = self.parse_call_args()
        node = Call(tok.text, args)
        node.line = tok.line
        return node

    def parse_call_args(self):
        self.consume("LPAREN")
        args = []

        if self.peek("RPAREN"):
            self.consume("RPAREN")
            return args

        args.append(self.parse_expression())
        while self.peek("COMMA"):
            self.consume("COMMA")
            args.append(self.parse_expression())
        self.consume("RPAREN")
        return args


def parse(tokens):
    return Parser(tokens).parse()
