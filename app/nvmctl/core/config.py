"""nvmctl configuration and settings.

This module provides the configuration model and I/O functions for
nvmctl. Every setting has a default, so the file is optional.

Configuration is stored in ~/.config/nvmctl/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nvmctl.core.paths import DEFAULT_LEDGER_FILENAME, get_config_path, resolve_ledger_path
from nvmctl.models.runtime import Platform

logger = logging.getLogger(__name__)

PlatformSetting = Literal["auto", "unix", "windows"]


class NvmctlConfig(BaseModel):
    """Configuration for nvmctl.

    Attributes:
        platform: Version manager flavour, or "auto" to detect from the OS.
        nvm_dir: Installation root override. None uses NVM_DIR / NVM_HOME
            or the platform default.
        ledger_path: Package ledger file; relative paths resolve against
            the working directory.
    """

    model_config = ConfigDict(extra="forbid")

    platform: Annotated[
        PlatformSetting,
        Field(description="Version manager flavour (auto, unix, windows)"),
    ] = "auto"
    nvm_dir: Annotated[
        str | None,
        Field(description="Version manager installation root"),
    ] = None
    ledger_path: Annotated[
        str,
        Field(min_length=1, description="Package ledger file"),
    ] = DEFAULT_LEDGER_FILENAME

    @property
    def effective_platform(self) -> Platform:
        """Resolve "auto" to the platform of the running interpreter."""
        if self.platform == "auto":
            return Platform.detect()
        return Platform(self.platform)

    @property
    def ledger_file(self) -> Path:
        """Absolute path of the package ledger."""
        return resolve_ledger_path(self.ledger_path)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> NvmctlConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated NvmctlConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return NvmctlConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> NvmctlConfig:
    """Load configuration, falling back to defaults when no file exists.

    Raises:
        ConfigError: If a config file exists but is invalid.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return NvmctlConfig()


def save_config(config: NvmctlConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The NvmctlConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: NvmctlConfig) -> dict[str, object]:
    """Convert NvmctlConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.
    """
    result: dict[str, object] = {
        "platform": config.platform,
        "ledger_path": config.ledger_path,
    }
    if config.nvm_dir is not None:
        result["nvm_dir"] = config.nvm_dir
    return result
