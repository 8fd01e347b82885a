"""File natives."""

from ctlang.values import ErrorValue, format_value


def read_file(args: list):
    """
    Return the contents of the file named by the single string argument.

    Returns:
        str | ErrorValue: The file text, or the reason it could not be read.
    """
    if len(args) != 1 or args[0] is None:
        return ErrorValue("Not enough arguments provided")
    path = args[0]
    if not isinstance(path, str):
        return ErrorValue(
            f"Expected file name to be of type string, but received: {format_value(path)}"
        )
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, ValueError) as e:
        return ErrorValue(str(e))


EXPORTS = [
    ("read_file", read_file),
]
