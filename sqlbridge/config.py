"""Connection option normalization.

Drivers receive their options as a :class:`ConnectionConfig`, built either
from a connection URI such as ``postgres://user:secret@db:5432/app?sslmode=require``
or from a mapping of option names.
"""

from collections.abc import Mapping
from typing import Any, Final, Optional, Union
from urllib.parse import parse_qs, unquote, urlsplit

from sqlbridge.exceptions import ImproperConfigurationError

__all__ = ("ConnectionConfig", "normalize_options")

_KNOWN_FIELDS: Final[tuple[str, ...]] = ("driver", "host", "port", "path", "database", "user", "password")


class ConnectionConfig:
    """Normalized options for opening a driver connection."""

    __slots__ = ("database", "driver", "extra", "host", "password", "path", "port", "user")

    def __init__(
        self,
        driver: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        path: Optional[str] = None,
        database: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        extra: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize connection options.

        Args:
            driver: Registered driver name, usually the URI scheme
            host: Server host name
            port: Server port
            path: Path component of the URI, e.g. a database file
            database: Database name; defaults to ``path`` without its leading slash
            user: User name
            password: Password
            extra: Driver specific options
        """
        self.driver = driver
        self.host = host
        self.port = port
        self.path = path
        self.database = database if database is not None else _database_from_path(path)
        self.user = user
        self.password = password
        self.extra = extra or {}

    @classmethod
    def from_uri(cls, uri: str) -> "ConnectionConfig":
        """Parse a connection URI.

        Query string options are stored in ``extra``; a key given more than once
        keeps all of its values as a list.

        Raises:
            ImproperConfigurationError: If the URI has no scheme or an invalid port.
        """
        parts = urlsplit(uri)
        if not parts.scheme:
            msg = f"Connection URI {uri!r} has no driver scheme"
            raise ImproperConfigurationError(msg)
        try:
            port = parts.port
        except ValueError as exc:
            msg = f"Connection URI {uri!r} has an invalid port"
            raise ImproperConfigurationError(msg) from exc

        extra: dict[str, Any] = {}
        for key, values in parse_qs(parts.query, keep_blank_values=True).items():
            extra[key] = values[0] if len(values) == 1 else values

        return cls(
            driver=parts.scheme,
            host=parts.hostname,
            port=port,
            path=unquote(parts.path) or None,
            user=unquote(parts.username) if parts.username else None,
            password=unquote(parts.password) if parts.password else None,
            extra=extra,
        )

    @classmethod
    def from_mapping(cls, options: "Mapping[Any, Any]") -> "ConnectionConfig":
        """Build from a mapping of option names.

        Keys are converted to strings. Unknown keys and the contents of a nested
        ``extra`` mapping end up in ``extra``.

        Raises:
            ImproperConfigurationError: If ``driver`` is missing, ``extra`` is not a
                mapping, or ``port`` is not an integer.
        """
        normalized = {str(key): value for key, value in options.items()}
        nested = normalized.pop("extra", None)
        if nested is not None and not isinstance(nested, Mapping):
            msg = "The 'extra' connection option must be a mapping."
            raise ImproperConfigurationError(msg)

        driver = normalized.get("driver")
        if not driver:
            msg = "Connection options must name a driver."
            raise ImproperConfigurationError(msg)

        port = normalized.get("port")
        if port is not None:
            try:
                port = int(port)
            except (TypeError, ValueError) as exc:
                msg = f"Invalid port {port!r}"
                raise ImproperConfigurationError(msg) from exc

        extra = {key: value for key, value in normalized.items() if key not in _KNOWN_FIELDS}
        if nested:
            extra.update(nested)

        return cls(
            driver=str(driver),
            host=normalized.get("host"),
            port=port,
            path=normalized.get("path"),
            database=normalized.get("database"),
            user=normalized.get("user"),
            password=normalized.get("password"),
            extra=extra,
        )

    def to_dict(self) -> "dict[str, Any]":
        """Return the options as a flat dictionary, ``extra`` merged in."""
        data = {field: getattr(self, field) for field in _KNOWN_FIELDS}
        data.update(self.extra)
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConnectionConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        parts = ", ".join(
            f"{field}={'***' if field == 'password' and self.password else repr(getattr(self, field))}"
            for field in (*_KNOWN_FIELDS, "extra")
        )
        return f"{type(self).__name__}({parts})"


def _database_from_path(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return path[1:] if path.startswith("/") else path


def normalize_options(options: "Union[str, Mapping[Any, Any], ConnectionConfig]") -> ConnectionConfig:
    """Normalize connection options given as a URI, a mapping or a config.

    Raises:
        ImproperConfigurationError: If the options cannot be understood.
    """
    if isinstance(options, ConnectionConfig):
        return options
    if isinstance(options, str):
        return ConnectionConfig.from_uri(options)
    if isinstance(options, Mapping):
        return ConnectionConfig.from_mapping(options)
    msg = f"Unsupported connection argument format: {type(options).__name__}"
    raise ImproperConfigurationError(msg)
