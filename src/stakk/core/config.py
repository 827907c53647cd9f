"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.stakk/config.toml.
The file is optional; every field has a default.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path

DEFAULT_REMOTE = "origin"
DEFAULT_TRUNK = "trunk()"


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in StakkContext.
    Command-line flags override these values per invocation.
    """

    remote: str = DEFAULT_REMOTE
    draft: bool = False
    trunk: str = DEFAULT_TRUNK


def global_config_path() -> Path:
    """Get the path to the global config file.

    Returns:
        Path to config file (for error messages and debugging)
    """
    return Path.home() / ".stakk" / "config.toml"


def load_global_config(path: Path | None = None) -> GlobalConfig:
    """Load global config from ~/.stakk/config.toml.

    Args:
        path: Config file path (defaults to ~/.stakk/config.toml)

    Returns:
        GlobalConfig with loaded values, or all defaults if the file is absent

    Raises:
        ValueError: If the file is not valid TOML or a field has the wrong type
    """
    config_path = path if path is not None else global_config_path()

    if not config_path.exists():
        return GlobalConfig()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    remote = data.get("remote", DEFAULT_REMOTE)
    draft = data.get("draft", False)
    trunk = data.get("trunk", DEFAULT_TRUNK)

    if not isinstance(remote, str) or not remote:
        raise ValueError(f"'remote' must be a non-empty string in {config_path}")
    if not isinstance(draft, bool):
        raise ValueError(f"'draft' must be true or false in {config_path}")
    if not isinstance(trunk, str) or not trunk:
        raise ValueError(f"'trunk' must be a non-empty string in {config_path}")

    return GlobalConfig(remote=remote, draft=draft, trunk=trunk)
