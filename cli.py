import sys
import traceback

import colorama
from colorama import Fore, Style

from errors import KubefnError
from generator import Generator
from lexer import Lexer
from parser import Parser


USAGE = [
    "Usage:",
    "  kubefn tokens <file.kfn>",
    "  kubefn parse <file.kfn>",
    "  kubefn build <file.kfn> [output.sh]",
    "  (optional) --debug to show Python traceback",
    "  (optional) --no-color to disable colored errors",
]


# node -> nested dict, for the `parse` command
def ast_to_dict(node):
    if node is None:
        return None

    t = node.__class__.__name__
    d = {"type": t}

    if t == "Program":
        d["statements"] = [ast_to_dict(s) for s in node.statements]
    elif t == "FunctionDef":
        d["name"] = node.name
        d["params"] = list(node.params)
        d["body"] = [ast_to_dict(s) for s in node.body]
    elif t == "VarAssign":
        d["name"] = node.name
        d["value"] = ast_to_dict(node.value)
    elif t == "VarRef":
        d["name"] = node.name
    elif t == "StringLiteral":
        d["value"] = node.value
    elif t == "Call":
        d["name"] = node.name
        d["args"] = [ast_to_dict(a) for a in node.args]
    elif t == "Prompt":
        pass
    else:
        d["raw"] = str(node)

    return d


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                lines.append(f"{sp}{k}:")
                if v:
                    lines.append(pretty(v, indent + 1))
            else:
                lines.append(f"{sp}{k}: {v}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def read_source(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def report(e, debug=False, color=True):
    if debug:
        traceback.print_exc()
        return
    if isinstance(e, KubefnError):
        msg = e.format()
    else:
        msg = f"Error: {e}"
    if color:
        msg = f"{Fore.RED}{msg}{Style.RESET_ALL}"
    print(msg)


def cmd_tokens(path, debug=False, color=True):
    try:
        tokens = Lexer(read_source(path)).tokenize()
    except (KubefnError, OSError) as e:
        report(e, debug, color)
        sys.exit(1)

    for tok in tokens:
        print(f"  {tok.line:>3}:{tok.column:<3} {tok.kind:<7} {tok.text}")


def cmd_parse(path, debug=False, color=True):
    try:
        tokens = Lexer(read_source(path)).tokenize()
        program = Parser(tokens).parse()
    except (KubefnError, OSError) as e:
        report(e, debug, color)
        sys.exit(1)

    print(pretty(ast_to_dict(program)))


def cmd_build(path, output=None, debug=False, color=True):
    try:
        tokens = Lexer(read_source(path)).tokenize()
        program = Parser(tokens).parse()
        code = Generator().generate(program)
    except (KubefnError, OSError) as e:
        report(e, debug, color)
        sys.exit(1)

    if output is None:
        print(code)
        return

    with open(output, "w", encoding="utf-8") as f:
        f.write(code + "\n")
    print(f"Built: {output}")


def usage():
    for line in USAGE:
        print(line)
    sys.exit(1)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)

    debug = False
    if "--debug" in args:
        debug = True
        args.remove("--debug")

    color = True
    if "--no-color" in args:
        color = False
        args.remove("--no-color")

    if color:
        colorama.just_fix_windows_console()

    if len(args) < 2:
        usage()

    cmd = args[0]
    path = args[1]
    extra = args[2:]

    if cmd == "tokens":
        if extra:
            print("Tokens does not accept extra arguments.")
            sys.exit(1)
        cmd_tokens(path, debug=debug, color=color)
    elif cmd == "parse":
        if extra:
            print("Parse does not accept extra arguments.")
            sys.exit(1)
        cmd_parse(path, debug=debug, color=color)
    elif cmd == "build":
        if len(extra) > 1:
            print("Build accepts at most one output path.")
            sys.exit(1)
        output = extra[0] if extra else None
        cmd_build(path, output=output, debug=debug, color=color)
    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
