import re

from errors import LexError


TOKEN_KINDS = (
    "FUNC",
    "VAR",
    "ASK",
    "STRING",
    "IDENT",
    "LPAREN",
    "RPAREN",
    "COMMA",
    "EQUALS",
    "LBRACE",
    "RBRACE",
)

# (kind, match, extract). Tried top to bottom, first match wins.
# Keywords and the $ sigil must stay above IDENT. Patterns are matched at the
# current offset, so none of them starts with \b (it would see the previous token).
TOKEN_RULES = [
    ("FUNC", re.compile(r"def\b"), None),
    ("VAR", re.compile(r"\$[A-Z_]+"), re.compile(r"[A-Z_]+")),
    ("ASK", re.compile(r"ask\b"), None),
    ("STRING", re.compile(r'"[^"]*"'), re.compile(r'(?<=")[^"]*(?=")')),
    ("IDENT", re.compile(r"[a-zA-Z_]+\b"), None),
    ("LPAREN", re.compile(r"\("), None),
    ("RPAREN", re.compile(r"\)"), None),
    ("COMMA", re.compile(r","), None),
    ("EQUALS", re.compile(r"="), None),
    ("LBRACE", re.compile(r"\{"), None),
    ("RBRACE", re.compile(r"\}"), None),
]

COMMENT = re.compile(r"#[^\n]*")


class Token:
    def __init__(self, kind, text, line=1, column=1):
        self.kind = kind
        self.text = text
        self.line = line
        self.column = column

    def __repr__(self):
        if self.text is not None:
            return f"{self.kind}({self.text})"
        return f"{self.kind}"

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.text == other.text

    def __hash__(self):
        return hash((self.kind, self.text))


class Lexer:
    def __init__(self, text, rules=None):
        self.text = text
        self.rules = rules if rules is not None else TOKEN_RULES
        self.pos = 0
        self.line = 1
        self.column = 1

    def advance(self, count):
        consumed = self.text[self.pos:self.pos + count]
        for ch in consumed:
            if ch == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += count
        return consumed

    # newlines are plain whitespace here; '#' starts a comment running to end of line
    def skip_whitespace(self):
        while self.pos < len(self.text):
            if self.text[self.pos].isspace():
                self.advance(1)
                continue
            comment = COMMENT.match(self.text, self.pos)
            if comment:
                self.advance(len(comment.group(0)))
                continue
            break

    def tokenize(self):
        tokens = []
        self.skip_whitespace()
        while self.pos < len(self.text):
            tokens.append(self.next_token())
            self.skip_whitespace()
        return tokens

    def next_token(self):
        for kind, find, extract in self.rules:
            found = find.match(self.text, self.pos)
            if not found:
                continue
            matched = found.group(0)
            start_line, start_col = self.line, self.column

            if extract is None:
                text = matched
            else:
                lifted = extract.search(matched)
                if lifted is None:
                    raise LexError(
                        f"Extract pattern for {kind} unable to lift from {matched!r}",
                        start_line,
                        start_col,
                        internal=True,
                    )
                text = lifted.group(0)

            self.advance(len(matched))
            return Token(kind, text, line=start_line, column=start_col)

        snippet = self.text[self.pos:self.pos + 30]
        if self.pos + 30 < len(self.text):
            snippet += "..."
        raise LexError(f"Couldn't match token on {snippet!r}", self.line, self.column)


def tokenize(source):
    return Lexer(source).tokenize()
