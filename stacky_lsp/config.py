"""Workspace configuration support for the Stacky language server."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConfigError

CONFIG_CANDIDATES = ("stacky.toml", ".stackyrc")

ENV_LOG_LEVEL = "STACKY_LSP_LOG_LEVEL"
ENV_LOG_FILE = "STACKY_LSP_LOG_FILE"


@dataclass(frozen=True)
class ServerConfig:
    """Settings applied when the server starts."""

    log_level: str = "info"
    log_file: Optional[Path] = None
    source: str = "stacky"
    trigger_characters: Tuple[str, ...] = (" ",)

    def with_overrides(self, **overrides: Any) -> "ServerConfig":
        values = {key: value for key, value in overrides.items() if value is not None}
        if "log_file" in values:
            values["log_file"] = Path(values["log_file"])
        return replace(self, **values)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_CANDIDATES:
        path = root / candidate
        if path.exists():
            return path
    return None


def _parse_lsp_section(data: Mapping[str, Any], root: Path) -> ServerConfig:
    section = data.get("lsp") or {}
    if not isinstance(section, dict):
        raise ConfigError("[lsp] must be a table", hint="Use `[lsp]` followed by key = value pairs")
    defaults = ServerConfig()
    log_file_raw = section.get("log_file")
    log_file: Optional[Path] = None
    if log_file_raw:
        log_file = Path(str(log_file_raw))
        if not log_file.is_absolute():
            log_file = (root / log_file).resolve()
    triggers = section.get("trigger_characters", defaults.trigger_characters)
    if isinstance(triggers, str):
        triggers = [triggers]
    return ServerConfig(
        log_level=str(section.get("log_level") or defaults.log_level),
        log_file=log_file,
        source=str(section.get("source") or defaults.source),
        trigger_characters=tuple(str(item) for item in triggers),
    )


def load_server_config(
    root: Path,
    explicit: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ServerConfig:
    """Resolve settings from the config file, then environment overrides."""

    root = root.resolve()
    env = os.environ if environ is None else environ
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        config = ServerConfig()
    else:
        try:
            if config_path.suffix == ".toml":
                data = _read_toml_config(config_path)
            else:
                data = _read_json_config(config_path)
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Could not read {config_path}: {exc}") from exc
        config = _parse_lsp_section(data, root)
    return config.with_overrides(
        log_level=env.get(ENV_LOG_LEVEL) or None,
        log_file=env.get(ENV_LOG_FILE) or None,
    )


__all__ = [
    "ServerConfig",
    "locate_config_file",
    "load_server_config",
    "ENV_LOG_LEVEL",
    "ENV_LOG_FILE",
]
