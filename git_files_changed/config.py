from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import os
import yaml

from git_files_changed.errors import ConfigError


CONFIG_FILENAME = ".git-files-changed.yml"

HEAD_REF_ENV = "GIT_FILES_CHANGED_HEAD_REF"
BASE_REF_ENV = "GIT_FILES_CHANGED_BASE_REF"

DEFAULT_CONFIG = {
    "head_ref": "HEAD",
    "base_ref": "main",
    "include_paths": [],
    "exclude_paths": [],
}


@dataclass
class ListerConfig:
    head_ref: str
    base_ref: str
    include_paths: list[str] = field(default_factory=list)
    exclude_paths: list[str] = field(default_factory=list)


def load_env_file(path: Path) -> None:
    """Load simple KEY=VALUE pairs from a .env file without overriding existing env."""
    if not path.exists() or not path.is_file():
        return

    for raw in path.read_text(errors="ignore").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _path_list(data: dict, key: str) -> list[str]:
    raw = data.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigError(f"Config '{key}' must be a list of glob patterns")
    return [str(x) for x in raw]


def _ref(data: dict, key: str) -> str:
    raw = data.get(key)
    if raw is None:
        return DEFAULT_CONFIG[key]
    if not isinstance(raw, str):
        raise ConfigError(
            f"Config '{key}' must be a string; quote numeric refs such as short hashes (got {raw!r})"
        )
    if not raw.strip():
        raise ConfigError(f"Config '{key}' must be a non-empty string")
    return raw


def load_config(path: str | None, root: Path | None = None) -> ListerConfig:
    """Read the YAML config at ``path``, or ``root/.git-files-changed.yml`` when it exists."""
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    elif root is not None and (root / CONFIG_FILENAME).is_file():
        config_path = root / CONFIG_FILENAME
    else:
        return ListerConfig(head_ref=DEFAULT_CONFIG["head_ref"], base_ref=DEFAULT_CONFIG["base_ref"])

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid config file {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    return ListerConfig(
        head_ref=_ref(data, "head_ref"),
        base_ref=_ref(data, "base_ref"),
        include_paths=_path_list(data, "include_paths"),
        exclude_paths=_path_list(data, "exclude_paths"),
    )


def apply_overrides(
    cfg: ListerConfig,
    head_ref: str | None = None,
    base_ref: str | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> ListerConfig:
    """Layer environment variables, then explicit options, over ``cfg``."""
    head = head_ref or os.getenv(HEAD_REF_ENV) or cfg.head_ref
    base = base_ref or os.getenv(BASE_REF_ENV) or cfg.base_ref
    return replace(
        cfg,
        head_ref=head,
        base_ref=base,
        include_paths=cfg.include_paths + list(include or []),
        exclude_paths=cfg.exclude_paths + list(exclude or []),
    )
