

"""Startup configuration: API key resolution and server settings.

The key is looked up once, in order:

1. the first command-line argument,
2. the ``LINEAR_API_KEY`` environment variable (a ``.env`` file in the
   working directory is loaded first and never overrides variables that are
   already set),
3. ``linearApiKey`` in a JSON config file: ``--config`` if given, else
   ``config.json`` in the working directory, else
   ``~/.linear-mcp/config.json``.

The resulting :class:`ServerConfig` is passed explicitly to whatever builds
the Linear client; nothing reads the key from process state afterwards.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv

from linear_mcp.errors import CredentialNotFoundError
from linear_mcp.types.core import FileConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
ENV_FILENAME = ".env"
USER_CONFIG_DIR_NAME = ".linear-mcp"
API_KEY_ENV = "LINEAR_API_KEY"
API_URL_ENV = "LINEAR_API_URL"
DEFAULT_API_URL = "https://api.linear.app/graphql"
DEFAULT_TIMEOUT = 30.0

KeySource = Literal["argument", "environment", "config_file"]


@dataclass(frozen=True)
class ServerConfig:
    api_key: str
    source: KeySource
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    log_file: Path | None = None

    def __repr__(self) -> str:
        # Keep the key out of tracebacks and log lines.
        return (
            f"ServerConfig(api_key='***', source={self.source!r}, api_url={self.api_url!r}, "
            f"timeout={self.timeout!r}, log_file={self.log_file!r})"
        )


def user_config_path() -> Path:
    return Path.home() / USER_CONFIG_DIR_NAME / CONFIG_FILENAME


def default_config_path() -> Path:
    """``./config.json`` when it exists, else the per-user file.

    MCP clients start servers from arbitrary working directories, so the
    per-user file is the one that reliably gets found.
    """
    local = Path.cwd() / CONFIG_FILENAME
    if local.exists():
        return local
    return user_config_path()


def load_env_file(path: Path | None = None) -> bool:
    """Load ``.env`` (default: in the working directory) into ``os.environ``.

    Variables that are already set win.  Returns False if there is no file.
    """
    return load_dotenv(path or Path.cwd() / ENV_FILENAME, override=False)


def read_config(config_path: Path) -> FileConfig:
    """Read the JSON config file.  Returns ``{}`` if missing or corrupt."""
    if not config_path.exists():
        return {}
    try:
        data: Any = json.loads(config_path.read_text())
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s, ignoring it: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object, got %s", config_path, type(data).__name__)
        return {}
    result: FileConfig = data  # type: ignore[assignment]
    return result


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def resolve_api_key(
    cli_value: str | None,
    environ: Mapping[str, str] | None = None,
    config_path: Path | None = None,
) -> tuple[str, KeySource]:
    """Return ``(api_key, source)`` following argument > env > file precedence.

    Empty strings count as absent.  Raises :class:`CredentialNotFoundError`
    when no source yields a key.
    """
    key = _clean(cli_value)
    if key:
        return key, "argument"

    env = os.environ if environ is None else environ
    key = _clean(env.get(API_KEY_ENV))
    if key:
        return key, "environment"

    path = config_path or default_config_path()
    key = _clean(read_config(path).get("linearApiKey"))
    if key:
        logger.info("Loaded API key from %s", path.name)
        return key, "config_file"

    msg = f"{API_KEY_ENV} not found in command line arguments, environment variables, or {path.name}"
    raise CredentialNotFoundError(msg)


def load_config(
    cli_value: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    config_path: Path | None = None,
    log_file: Path | None = None,
) -> ServerConfig:
    """Build the one :class:`ServerConfig` used for the life of the process."""
    env = os.environ if environ is None else environ
    path = config_path or default_config_path()
    api_key, source = resolve_api_key(cli_value, env, path)
    file_cfg = read_config(path)

    api_url = _clean(env.get(API_URL_ENV)) or _clean(file_cfg.get("apiUrl")) or DEFAULT_API_URL
    timeout = file_cfg.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
        logger.warning("Ignoring invalid timeout %r in %s", timeout, path.name)
        timeout = DEFAULT_TIMEOUT

    return ServerConfig(
        api_key=api_key,
        source=source,
        api_url=api_url,
        timeout=float(timeout),
        log_file=log_file,
    )
