"""Console input and output natives: ``print``, ``input`` and ``flush``."""

import sys

from ctlang.values import ErrorValue, format_value


def render(args: list) -> str:
    """
    Build the text ``print`` writes for ``args``.

    When the first argument is a string it is a format: each ``{}`` is
    replaced by the display form of the next argument, ``{{`` and ``}}``
    produce literal braces. Any other first argument is written in its
    display form. Arguments without a matching ``{}`` are ignored.
    """
    if not args:
        return ""
    fmt = args[0]
    if not isinstance(fmt, str):
        return format_value(fmt)

    remaining = iter(args[1:])
    out = []
    i = 0
    while i < len(fmt):
        pair = fmt[i:i + 2]
        if pair == "{}":
            out.append(format_value(next(remaining, "")))
            i += 2
        elif pair in ("{{", "}}"):
            out.append(pair[0])
            i += 2
        else:
            out.append(fmt[i])
            i += 1
    return "".join(out)


def print_(args: list):
    """Write the formatted arguments to stdout without a trailing newline."""
    sys.stdout.write(render(args))
    return None


def input_(args: list):
    """Print the prompt, then return one line of stdin with surrounding whitespace trimmed."""
    print_(args)
    sys.stdout.flush()
    line = sys.stdin.readline()
    if not line:
        return ErrorValue("Unable to read input")
    return line.strip()


def flush(args: list):
    print_(args)
    sys.stdout.flush()
    return None


EXPORTS = [
    ("print", print_),
    ("input", input_),
    ("flush", flush),
]
