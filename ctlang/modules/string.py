"""String natives."""

from ctlang.values import ErrorValue, format_value


def len_(args: list):
    """Return the number of characters in a string."""
    if len(args) != 1 or args[0] is None:
        return ErrorValue("Not enough arguments provided")
    if not isinstance(args[0], str):
        return ErrorValue(
            f"Expected structure that has function length, but received: {format_value(args[0])}"
        )
    return len(args[0])


EXPORTS = [
    ("len", len_),
]
