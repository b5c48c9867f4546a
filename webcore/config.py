"""Project configuration (``webc.toml``)."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import WebCoreConfigError

CONFIG_FILENAME = "webc.toml"
THEME_FILENAME = "theme.toml"
MODE_ENV_VAR = "WEBCORE_MODE"
VALID_MODES = ("dev", "prod")


@dataclass
class BuildPaths:
    """Source, output and public-asset directories, relative to the project root."""

    src: Path = Path("src")
    out: Path = Path("dist")
    public: Path = Path("public")


@dataclass
class ProjectConfig:
    """Resolved project configuration."""

    root: Path
    title: str = "WebCore App"
    lang: str = "fr"
    mode: str = "dev"
    paths: BuildPaths = field(default_factory=BuildPaths)
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def src_dir(self) -> Path:
        return self._resolve(self.paths.src)

    @property
    def out_dir(self) -> Path:
        return self._resolve(self.paths.out)

    @property
    def public_dir(self) -> Path:
        return self._resolve(self.paths.public)

    @property
    def theme_path(self) -> Path:
        return self.root / THEME_FILENAME

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root / path


def _read_toml_config(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise WebCoreConfigError(f"Failed to parse {path.name}: {exc}", path=str(path)) from exc


def _table(data: Dict[str, Any], name: str, path: Path) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise WebCoreConfigError(f"[{name}] must be a table", path=str(path))
    return section


def validate_mode(mode: str, *, path: Optional[str] = None) -> str:
    if mode not in VALID_MODES:
        raise WebCoreConfigError(
            f"Unknown build mode '{mode}'",
            path=path,
            hint=f"Use one of: {', '.join(VALID_MODES)}",
        )
    return mode


def load_project_config(root: Path, *, env: Optional[Dict[str, str]] = None) -> ProjectConfig:
    """Read ``webc.toml`` from ``root``; ``WEBCORE_MODE`` overrides ``[app] mode``."""
    root = Path(root).resolve()
    config_path = root / CONFIG_FILENAME
    if not config_path.exists():
        raise WebCoreConfigError(
            f"{CONFIG_FILENAME} not found",
            path=str(config_path),
            hint="Run the build from a WebCore project directory.",
        )

    data = _read_toml_config(config_path)
    app_section = _table(data, "app", config_path)
    build_section = _table(data, "build", config_path)

    defaults = BuildPaths()
    paths = BuildPaths(
        src=Path(build_section.get("src") or defaults.src),
        out=Path(build_section.get("out") or defaults.out),
        public=Path(build_section.get("public") or defaults.public),
    )

    environ = os.environ if env is None else env
    mode = str(environ.get(MODE_ENV_VAR) or app_section.get("mode") or "dev")

    return ProjectConfig(
        root=root,
        title=str(app_section.get("title") or ProjectConfig.title),
        lang=str(app_section.get("lang") or ProjectConfig.lang),
        mode=validate_mode(mode, path=str(config_path)),
        paths=paths,
        raw=data,
    )


__all__ = [
    "CONFIG_FILENAME",
    "THEME_FILENAME",
    "MODE_ENV_VAR",
    "VALID_MODES",
    "BuildPaths",
    "ProjectConfig",
    "validate_mode",
    "load_project_config",
]
