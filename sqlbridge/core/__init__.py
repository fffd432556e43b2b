"""sqlbridge core: client-side interpolation and typed value decoding.

- calendar.py: ProlepticDate, dates with astronomical year numbering
- literals.py: rendering of bind values as SQL literals
- interpolation.py: quote and comment aware placeholder scanner
- decoding.py: decoders for raw scalar text returned by a backend
- result.py: Result container
"""

from sqlbridge.core.calendar import ProlepticDate
from sqlbridge.core.decoding import (
    DecodeKind,
    decode_date,
    decode_datetime_with_zone,
    decode_datetime_without_zone,
    decode_decimal,
    decode_float,
    decode_value,
    system_time_zone,
)
from sqlbridge.core.interpolation import (
    InterpolationConfig,
    Placeholder,
    ScanState,
    count_placeholders,
    interpolate,
    scan_placeholders,
)
from sqlbridge.core.literals import BindKind, classify_bind_value, render_literal, to_text
from sqlbridge.core.result import Result

__all__ = (
    "BindKind",
    "DecodeKind",
    "InterpolationConfig",
    "Placeholder",
    "ProlepticDate",
    "Result",
    "ScanState",
    "classify_bind_value",
    "count_placeholders",
    "decode_date",
    "decode_datetime_with_zone",
    "decode_datetime_without_zone",
    "decode_decimal",
    "decode_float",
    "decode_value",
    "interpolate",
    "render_literal",
    "scan_placeholders",
    "system_time_zone",
    "to_text",
)
