from errors import GenerationError


# name -> argument counts. Consulted by the generator only; the parser
# accepts any call name.
FUNCTION_LIBRARY = {
    "print": {"required": 1, "optional": 0},
    "find_namespace": {"required": 1, "optional": 0},
    "find_pod": {"required": 1, "optional": 1},
    "scale_pods_in_namespace_to": {"required": 2, "optional": 0},
    "bash_into": {"required": 1, "optional": 1},
    "tail_log": {"required": 1, "optional": 1},
    "port_forward": {"required": 3, "optional": 1},
}


def signature(name, library=None, line=None):
    if library is None:
        library = FUNCTION_LIBRARY
    info = library.get(name)
    if info is None:
        raise GenerationError(f"Unknown function {name}, not in library", line)
    return info


def check_arity(name, count, info, line=None):
    required = info["required"]
    maximum = required + info["optional"]
    if count < required:
        raise GenerationError(f"Expecting at least {required} args but got {count} for {name}", line)
    if count > maximum:
        raise GenerationError(f"Got {count} args for {name} but the maximum is {maximum}", line)
