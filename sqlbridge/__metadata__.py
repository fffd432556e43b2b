"""Metadata for the Project."""

from importlib.metadata import PackageNotFoundError, metadata, version

__all__ = ("__project__", "__version__")

try:
    __version__ = version("sqlbridge")
    __project__ = metadata("sqlbridge")["Name"]
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.1"
    __project__ = "sqlbridge"
finally:
    del version, PackageNotFoundError, metadata
