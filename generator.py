import shlex

from ast_nodes import Program, FunctionDef, Call, VarAssign, VarRef, StringLiteral, Prompt
from errors import GenerationError
from lexer import tokenize
from library import FUNCTION_LIBRARY, signature, check_arity
from parser import parse


PROMPT = "$(read temp && echo $temp)"
INDENT = "  "


def ns_flag(value):
    # value is already rendered shell text, or None when the namespace arg was omitted
    if value is None:
        return ""
    return f"-n {value} "


class Generator:
    def __init__(self, library=None):
        self.library = library if library is not None else FUNCTION_LIBRARY
        # assignment lines lifted out of argument position, emitted before the statement
        self._hoisted = []

    def generate(self, node):
        self._hoisted = []
        text = self.gen(node)
        lines = self._hoisted + [text]
        self._hoisted = []
        return "\n".join(lines)

    def gen(self, node):
        if isinstance(node, FunctionDef):
            return self.gen_function_def(node)

        if isinstance(node, Program):
            return "\n".join(self.gen_statements(node.statements))

        if isinstance(node, Prompt):
            return PROMPT

        if isinstance(node, VarAssign):
            return self.gen_var_assign(node)

        if isinstance(node, VarRef):
            return f"${node.name}"

        if isinstance(node, StringLiteral):
            return shlex.quote(node.value)

        if isinstance(node, Call):
            return self.gen_library_call(node)

        raise GenerationError(f"Unsure what to do with {node.__class__.__name__}", getattr(node, "line", None))

    def gen_statements(self, statements):
        lines = []
        for stmt in statements:
            saved = self._hoisted
            self._hoisted = []
            text = self.gen(stmt)
            lines.extend(self._hoisted)
            lines.append(text)
            self._hoisted = saved
        return lines

    def gen_function_def(self, node):
        lines = [f"function {node.name}() {{"]
        for i, param in enumerate(node.params, start=1):
            lines.append(f'{INDENT}local {param}="${{{i}}}"')
        for line in self.gen_statements(node.body):
            lines.append(INDENT + line)
        lines.append("}")
        return "\n".join(lines)

    def gen_var_assign(self, node):
        value = node.value
        if isinstance(value, Call):
            # capture the command's output
            return f"{node.name}=$({self.gen(value)})"
        if isinstance(value, (StringLiteral, Prompt)):
            return f"{node.name}={self.gen(value)}"
        raise GenerationError(
            f"Cannot assign {value.__class__.__name__} to {node.name}",
            getattr(node, "line", None),
        )

    def arg(self, node):
        # render a call argument as a single shell word
        if isinstance(node, Call):
            return f"$({self.gen(node)})"
        if isinstance(node, VarAssign):
            self._hoisted.append(self.gen(node))
            return f"${node.name}"
        return self.gen(node)

    def optional_arg(self, args, index):
        if index < len(args):
            return self.arg(args[index])
        return None

    def gen_library_call(self, node):
        name = node.name
        args = node.args
        line = getattr(node, "line", None)

        info = signature(name, self.library, line)
        check_arity(name, len(args), info, line)

        if name == "print":
            first = args[0]
            if isinstance(first, (StringLiteral, VarRef)):
                return f"echo {self.gen(first)}"
            return f'echo "{self.arg(first)}"'

        if name == "find_namespace":
            return f"kubectl get ns | grep {self.arg(args[0])} | grep -o '^[a-z0-9-]\\+'"

        if name == "find_pod":
            query = self.arg(args[0])
            ns = ns_flag(self.optional_arg(args, 1))
            return f"kubectl {ns}get pods | grep {query} | grep Running | head -n 1 | grep -o '^[a-z0-9-]\\+'"

        if name == "scale_pods_in_namespace_to":
            return f"kubectl scale deploy -n {self.arg(args[0])} --replicas={self.arg(args[1])} --all"

        if name == "tail_log":
            pod = self.arg(args[0])
            ns = ns_flag(self.optional_arg(args, 1))
            return f"kubectl {ns}logs {pod} -f"

        if name == "bash_into":
            pod = self.arg(args[0])
            ns = ns_flag(self.optional_arg(args, 1))
            return f"kubectl exec {ns}-it {pod} -- /bin/bash"

        if name == "port_forward":
            pod = self.arg(args[0])
            local_port = self.arg(args[1])
            remote_port = self.arg(args[2])
            ns = ns_flag(self.optional_arg(args, 3))
            return f"kubectl port-forward {ns}{pod} {local_port}:{remote_port}"

        raise GenerationError(f"Library function {name} not implemented", line)


def generate(node, library=None):
    return Generator(library).generate(node)


def compile_source(source, library=None):
    return generate(parse(tokenize(source)), library)
