from ast_nodes import FunctionDef, Call, VarAssign, VarRef, StringLiteral, Prompt
from errors import ParseError, SemanticError
from lexer import Token, tokenize
from parser import Parser, parse


EXAMPLE = """
def main() {
  $NS="prod"
  $POD="web-1"
  bash_into($POD,$NS)
}
"""


def parse_source(source):
    return parse(tokenize(source))


def expect_error(source, error_type):
    try:
        parse_source(source)
    except error_type as e:
        return e
    raise AssertionError(f"Expected {error_type.__name__} for {source!r}")


def test_function_definition():
    root = parse_source(EXAMPLE)
    if not isinstance(root, FunctionDef):
        raise AssertionError(f"Got {root!r}")
    if root.name != "main" or root.params != []:
        raise AssertionError(f"Got name={root.name} params={root.params}")

    ns, pod, call = root.body
    if not (isinstance(ns, VarAssign) and ns.name == "NS" and isinstance(ns.value, StringLiteral)):
        raise AssertionError("first statement should assign NS")
    if ns.value.value != "prod" or pod.value.value != "web-1":
        raise AssertionError("string values should be unquoted")
    if not (isinstance(call, Call) and call.name == "bash_into"):
        raise AssertionError(f"Got {call!r}")
    if [a.name for a in call.args] != ["POD", "NS"] or not all(isinstance(a, VarRef) for a in call.args):
        raise AssertionError("bash_into args should be variable references")


def test_line_numbers_on_nodes():
    root = parse_source(EXAMPLE)
    if root.line != 2 or root.body[2].line != 5:
        raise AssertionError(f"Got {root.line}, {root.body[2].line}")


def test_parameters():
    root = parse_source('def connect(NS, POD) { bash_into($POD, $NS) }')
    if root.params != ["NS", "POD"]:
        raise AssertionError(f"Got {root.params}")


def test_parameters_are_not_assignments():
    root = parse_source('def main(NS, NS) { $NS="x" print($NS) }')
    if root.params != ["NS", "NS"]:
        raise AssertionError(f"Got {root.params}")
    if not isinstance(root.body[0], VarAssign):
        raise AssertionError(f"Got {root.body[0]!r}")
    expect_error('def main(NS) { $NS="x" $NS="y" }', SemanticError)


def test_prompt_assignment():
    root = parse_source("def main() { $ANSWER=ask }")
    value = root.body[0].value
    if not isinstance(value, Prompt):
        raise AssertionError(f"Got {value!r}")


def test_call_assignment_and_nesting():
    root = parse_source('def main() { $POD=find_pod("web", find_namespace("prod")) }')
    call = root.body[0].value
    if not (isinstance(call, Call) and call.name == "find_pod"):
        raise AssertionError(f"Got {call!r}")
    inner = call.args[1]
    if not (isinstance(inner, Call) and inner.name == "find_namespace"):
        raise AssertionError(f"Got {inner!r}")


def test_assignment_inside_call_args_declares_variable():
    root = parse_source('def main() { bash_into($POD=find_pod("web")) print($POD) }')
    if not isinstance(root.body[0].args[0], VarAssign):
        raise AssertionError("argument should be an assignment")


def test_empty_call_args():
    root = parse_source("def main() { noop() }")
    if root.body[0].args != []:
        raise AssertionError(f"Got {root.body[0].args}")


def test_empty_body():
    root = parse_source("def main() {}")
    if root.body != []:
        raise AssertionError(f"Got {root.body}")


def test_unknown_function_still_parses():
    root = parse_source('def main() { frobnicate("1") }')
    if root.body[0].name != "frobnicate":
        raise AssertionError(f"Got {root.body[0].name}")


def test_duplicate_assignment():
    e = expect_error('def main() { $A="x" $A="y" }', SemanticError)
    if "already" not in str(e).lower():
        raise AssertionError(f"Got {e}")


def test_reference_before_assignment():
    e = expect_error("def main() { print($A) }", SemanticError)
    if "not been set" not in str(e):
        raise AssertionError(f"Got {e}")


def test_assignment_cannot_reference_itself():
    expect_error("def main() { $A=find_pod($A) }", SemanticError)


def test_variable_aliasing_is_rejected():
    expect_error('def main() { $A="x" $B=$A }', ParseError)


def test_prompt_is_not_a_call_argument():
    expect_error("def main() { print(ask) }", ParseError)


def test_prompt_is_not_a_statement():
    expect_error("def main() { ask }", ParseError)


def test_missing_closing_brace():
    e = expect_error('def main() { print("x")', ParseError)
    if "end of input" not in str(e):
        raise AssertionError(f"Got {e}")


def test_tokens_after_function():
    expect_error('def main() { } print("x")', ParseError)


def test_missing_function_name():
    e = expect_error("def () { }", ParseError)
    if "Expected IDENT, got LPAREN" not in str(e):
        raise AssertionError(f"Got {e}")


def test_script_must_be_a_function():
    e = expect_error('$A="x" print($A)', ParseError)
    if "Expected FUNC, got VAR" not in str(e):
        raise AssertionError(f"Got {e}")


def test_empty_input_fails():
    try:
        parse([])
    except ParseError as e:
        if "Expected FUNC, got end of input" not in str(e):
            raise AssertionError(f"Got {e}")
        return
    raise AssertionError("Expected ParseError for empty input")


def test_peek_past_end_fails():
    p = Parser([Token("IDENT", "main")])
    if not p.peek("IDENT"):
        raise AssertionError("peek should see the first token")
    try:
        p.peek("LPAREN", 1)
    except ParseError:
        return
    raise AssertionError("peek past the end should fail")


def test_consume_mismatch_fails():
    p = Parser([Token("IDENT", "main")])
    try:
        p.consume("FUNC")
    except ParseError as e:
        if "Expected FUNC, got IDENT" not in str(e):
            raise AssertionError(f"Got {e}")
        return
    raise AssertionError("consume should reject the wrong kind")


def test_variable_sets_are_per_parser():
    source = 'def main() { $A="x" }'
    parse_source(source)
    parse_source(source)


def test_trailing_variable_without_closing_brace():
    e = expect_error('def main() { $A="x" print($A) $A', ParseError)
    if "end of input" not in str(e):
        raise AssertionError(f"Got {e}")
