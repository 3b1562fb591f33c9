"""linear-mcp: Model Context Protocol server for the Linear issue tracker."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("linear-mcp")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = ["__version__"]
