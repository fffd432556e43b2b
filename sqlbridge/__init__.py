"""sqlbridge: one driver surface over heterogeneous SQL backends."""

from sqlbridge import config, core, driver, exceptions, registry, typing, utils
from sqlbridge.__metadata__ import __version__
from sqlbridge.config import ConnectionConfig, normalize_options
from sqlbridge.core import (
    BindKind,
    DecodeKind,
    InterpolationConfig,
    ProlepticDate,
    Result,
    count_placeholders,
    decode_date,
    decode_datetime_with_zone,
    decode_datetime_without_zone,
    decode_decimal,
    decode_float,
    decode_value,
    interpolate,
    system_time_zone,
)
from sqlbridge.driver import DriverBase, EmulatedStatementExecutor, Statement
from sqlbridge.exceptions import (
    ArityMismatchError,
    DecodeError,
    ExtraParameterError,
    MissingParameterError,
    SQLBridgeError,
    UnregisteredDriverError,
    UnterminatedConstructError,
)
from sqlbridge.registry import DriverRegistry

__all__ = (
    "ArityMismatchError",
    "BindKind",
    "ConnectionConfig",
    "DecodeError",
    "DecodeKind",
    "DriverBase",
    "DriverRegistry",
    "EmulatedStatementExecutor",
    "ExtraParameterError",
    "InterpolationConfig",
    "MissingParameterError",
    "ProlepticDate",
    "Result",
    "SQLBridgeError",
    "Statement",
    "UnregisteredDriverError",
    "UnterminatedConstructError",
    "__version__",
    "config",
    "core",
    "count_placeholders",
    "decode_date",
    "decode_datetime_with_zone",
    "decode_datetime_without_zone",
    "decode_decimal",
    "decode_float",
    "decode_value",
    "driver",
    "exceptions",
    "interpolate",
    "normalize_options",
    "registry",
    "system_time_zone",
    "typing",
    "utils",
)
