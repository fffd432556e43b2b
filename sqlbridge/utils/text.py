"""Quote functions drivers can use with :func:`~sqlbridge.core.interpolation.interpolate`."""

__all__ = ("escape_backslash_quotes", "escape_single_quotes")


def escape_single_quotes(value: str) -> str:
    """Escape text for a standard SQL single-quoted literal.

    Each ``'`` is doubled.

    Args:
        value (str): the text to escape

    Returns:
        str: the escaped text, without surrounding quotes
    """
    return value.replace("'", "''")


def escape_backslash_quotes(value: str) -> str:
    """Escape text for backends that treat backslash as an escape character.

    Backslashes are doubled first, then quotes are escaped with a backslash,
    as MySQL expects with its default SQL mode.

    Args:
        value (str): the text to escape

    Returns:
        str: the escaped text, without surrounding quotes
    """
    return value.replace("\\", "\\\\").replace("'", "\\'").replace('"', '\\"').replace("\x00", "\\0")
