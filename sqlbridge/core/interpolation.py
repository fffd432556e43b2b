"""Client-side bind value interpolation.

Drivers for backends without native bind parameters use :func:`interpolate`
to turn a ``?`` template into literal SQL. The template is scanned once, left
to right, by a five state automaton so that ``?`` inside quoted literals and
comments is never treated as a placeholder:

- ``NORMAL``: ``?`` is a placeholder, ``'``, ``"``, ``/*`` and ``--`` switch state
- ``SINGLE_QUOTED`` / ``DOUBLE_QUOTED``: ends at the matching unescaped quote
- ``BLOCK_COMMENT``: ends at ``*/``
- ``LINE_COMMENT``: ends at a line break or the end of input

Text inside literals and comments is copied verbatim. The arity check runs
before any value is rendered, so a mismatch never yields partial SQL.
"""

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, NamedTuple, Optional

from mypy_extensions import mypyc_attr

from sqlbridge.core.literals import render_literal
from sqlbridge.exceptions import ExtraParameterError, MissingParameterError, UnterminatedConstructError

if TYPE_CHECKING:
    from sqlbridge.typing import BindValue, QuoteFn

__all__ = (
    "InterpolationConfig",
    "Placeholder",
    "ScanState",
    "count_placeholders",
    "interpolate",
    "scan_placeholders",
)


class ScanState(str, Enum):
    """Scanner states."""

    NORMAL = "normal"
    SINGLE_QUOTED = "single_quoted"
    DOUBLE_QUOTED = "double_quoted"
    BLOCK_COMMENT = "block_comment"
    LINE_COMMENT = "line_comment"

    def __str__(self) -> str:
        return self.value


_QUOTE_CHARS = {ScanState.SINGLE_QUOTED: "'", ScanState.DOUBLE_QUOTED: '"'}
_UNTERMINATED_STATES = frozenset({ScanState.SINGLE_QUOTED, ScanState.DOUBLE_QUOTED, ScanState.BLOCK_COMMENT})


@mypyc_attr(allow_interpreted_subclasses=True)
class InterpolationConfig:
    """Declarative configuration for a driver's interpolation behaviour."""

    __slots__ = ("allow_escaped_placeholders", "backslash_escapes", "type_coercion_map")

    def __init__(
        self,
        backslash_escapes: bool = False,
        allow_escaped_placeholders: bool = True,
        type_coercion_map: Optional[dict[type, Callable[[Any], Any]]] = None,
    ) -> None:
        """Initialize interpolation configuration.

        Args:
            backslash_escapes: Whether a backslash inside a quoted literal escapes the next character
            allow_escaped_placeholders: Whether ``\\?`` outside literals is emitted as a literal ``?``
            type_coercion_map: Mapping of types to converters applied before rendering
        """
        self.backslash_escapes = backslash_escapes
        self.allow_escaped_placeholders = allow_escaped_placeholders
        self.type_coercion_map = type_coercion_map or {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(backslash_escapes={self.backslash_escapes!r}, "
            f"allow_escaped_placeholders={self.allow_escaped_placeholders!r}, "
            f"type_coercion_map={self.type_coercion_map!r})"
        )


DEFAULT_CONFIG = InterpolationConfig()


class Placeholder(NamedTuple):
    """A placeholder found by the scanner."""

    position: int
    escaped: bool = False


def scan_placeholders(sql: str, config: Optional[InterpolationConfig] = None) -> list[Placeholder]:
    """Locate placeholders outside literals and comments.

    Args:
        sql: SQL template.
        config: Interpolation configuration.

    Raises:
        UnterminatedConstructError: If the template ends inside a quoted literal or block comment.

    Returns:
        Placeholders in template order. Escaped ``\\?`` sequences are reported with
        ``escaped=True`` and point at the backslash.
    """
    config = config or DEFAULT_CONFIG
    marks: list[Placeholder] = []
    state = ScanState.NORMAL
    opened_at = 0
    length = len(sql)
    i = 0

    while i < length:
        char = sql[i]
        following = sql[i + 1] if i + 1 < length else ""

        if state is ScanState.NORMAL:
            if char == "?":
                marks.append(Placeholder(i))
            elif char == "\\" and following == "?" and config.allow_escaped_placeholders:
                marks.append(Placeholder(i, escaped=True))
                i += 2
                continue
            elif char == "'":
                state, opened_at = ScanState.SINGLE_QUOTED, i
            elif char == '"':
                state, opened_at = ScanState.DOUBLE_QUOTED, i
            elif char == "/" and following == "*":
                state, opened_at = ScanState.BLOCK_COMMENT, i
                i += 2
                continue
            elif char == "-" and following == "-":
                state, opened_at = ScanState.LINE_COMMENT, i
                i += 2
                continue
        elif state is ScanState.SINGLE_QUOTED or state is ScanState.DOUBLE_QUOTED:
            if char == "\\" and config.backslash_escapes:
                i += 2
                continue
            if char == _QUOTE_CHARS[state]:
                state = ScanState.NORMAL
        elif state is ScanState.BLOCK_COMMENT:
            if char == "*" and following == "/":
                state = ScanState.NORMAL
                i += 2
                continue
        elif char in "\r\n":
            state = ScanState.NORMAL
        i += 1

    if state in _UNTERMINATED_STATES:
        raise UnterminatedConstructError(sql, state.value, opened_at)
    return marks


def count_placeholders(sql: str, config: Optional[InterpolationConfig] = None) -> int:
    """Count the placeholders a template expects bind values for.

    Raises:
        UnterminatedConstructError: If the template ends inside a quoted literal or block comment.
    """
    return sum(1 for mark in scan_placeholders(sql, config) if not mark.escaped)


def interpolate(
    sql: str, values: "Sequence[BindValue]", quote: "QuoteFn", config: Optional[InterpolationConfig] = None
) -> str:
    """Substitute bind values for the placeholders in ``sql``.

    Args:
        sql: SQL template with ``?`` placeholders.
        values: Positional bind values, one per placeholder.
        quote: Driver supplied function escaping text for a single-quoted literal.
        config: Interpolation configuration.

    Raises:
        UnterminatedConstructError: If the template ends inside a quoted literal or block comment.
        MissingParameterError: If fewer values than placeholders are supplied.
        ExtraParameterError: If more values than placeholders are supplied.

    Returns:
        The SQL with every placeholder replaced by a literal.
    """
    config = config or DEFAULT_CONFIG
    values = tuple(values)
    marks = scan_placeholders(sql, config)

    expected = sum(1 for mark in marks if not mark.escaped)
    if expected > len(values):
        raise MissingParameterError(expected, len(values), sql)
    if expected < len(values):
        raise ExtraParameterError(expected, len(values), sql)

    pieces: list[str] = []
    cursor = 0
    bound = iter(values)
    for mark in marks:
        pieces.append(sql[cursor : mark.position])
        if mark.escaped:
            pieces.append("?")
            cursor = mark.position + 2
        else:
            pieces.append(render_literal(next(bound), quote, config.type_coercion_map))
            cursor = mark.position + 1
    pieces.append(sql[cursor:])
    return "".join(pieces)
