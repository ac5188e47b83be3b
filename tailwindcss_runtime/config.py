"""Settings model and YAML loader for the CLI.

Responsibilities:
- Define file-level defaults for compile and watch runs as a typed dataclass.
- Load and validate YAML settings files with strict key checking.

Key types:
- `RuntimeSettings`: defaults shared by `compile` and `watch` commands.
- `ConfigLoader`: static construction helpers for `RuntimeSettings`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from .commands import CommandConfig
from .errors import ConfigError


_FLAG_TOKENS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def _setting_text(value: object) -> str | None:
    """Strip a YAML scalar to text; blank and missing values become `None`."""

    text = "" if value is None else str(value).strip()
    return text or None


def _setting_flag(value: object) -> bool | None:
    """Read a YAML flag from a bool or a `yes`/`no`-style token; `None` when unreadable."""

    if isinstance(value, bool):
        return value
    text = _setting_text(value)
    return None if text is None else _FLAG_TOKENS.get(text.lower())


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Defaults for one CLI run.

    Attributes:
        exe_path: Search directory for packaged binaries (`None` uses the package default).
        input_path: Input stylesheet.
        output_path: Output stylesheet.
        config_path: Tailwind config file.
        postcss_path: PostCSS config file.
        debug: Disable minification.
        poll: Use polling in watch mode.
        always_write: Keep watching after stdin closes.
        css_compressor_active: Another tool already compresses the CSS output.
    """

    exe_path: Path | None = None
    input_path: Path | None = None
    output_path: Path | None = None
    config_path: Path | None = None
    postcss_path: Path | None = None
    debug: bool = False
    poll: bool = False
    always_write: bool = False
    css_compressor_active: bool = False

    def with_overrides(self, **overrides: object) -> RuntimeSettings:
        """Return a copy where every non-`None` override replaces the file value."""

        explicit = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **explicit)

    def to_command_config(self, watch: bool) -> CommandConfig:
        """Build the command-builder configuration for a compile or watch run."""

        return CommandConfig(
            debug=self.debug,
            watch=watch,
            poll=self.poll,
            always_write=self.always_write,
            css_compressor_active=self.css_compressor_active,
            input_path=self.input_path,
            output_path=self.output_path,
            config_path=self.config_path,
            postcss_path=self.postcss_path,
        )


class ConfigLoader:
    """Factory methods for creating `RuntimeSettings` from settings files."""

    _PATH_KEYS = {
        "exe_path": "exe_path",
        "input": "input_path",
        "output": "output_path",
        "tailwind_config": "config_path",
        "postcss": "postcss_path",
    }
    _BOOLEAN_KEYS = {
        "debug": "debug",
        "poll": "poll",
        "always": "always_write",
        "css_compressor": "css_compressor_active",
    }

    @staticmethod
    def from_yaml(path: Path) -> RuntimeSettings:
        """Create validated settings from a YAML file."""

        if not path.is_file():
            raise ConfigError(
                f"Config file not found: `{path}`.",
                hint="Provide an existing path via `--config <path.yaml>`.",
            )
        try:
            payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(
                f"Invalid YAML in config file `{path}`: {exc}",
                hint="Verify YAML syntax and rerun.",
            ) from exc
        return ConfigLoader.from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_mapping(payload: object, source_label: str = "mapping") -> RuntimeSettings:
        """Create validated settings from an already parsed mapping."""

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ConfigError(f"{source_label} must contain a top-level mapping/object.")

        ConfigLoader._validate_keys(payload, source_label)
        values: dict[str, Any] = {}
        for key, field_name in ConfigLoader._PATH_KEYS.items():
            raw = _setting_text(payload.get(key))
            if raw is not None:
                values[field_name] = Path(raw)
        for key, field_name in ConfigLoader._BOOLEAN_KEYS.items():
            if key not in payload:
                continue
            parsed = _setting_flag(payload[key])
            if parsed is None:
                raise ConfigError(
                    f"{source_label} field `{key}` must be a boolean value "
                    "(`true`/`false`, `1`/`0`, `yes`/`no`).",
                    hint="Fix config schema/values and rerun.",
                )
            values[field_name] = parsed
        return RuntimeSettings(**values)

    @staticmethod
    def _validate_keys(payload: Mapping[str, Any], source_label: str) -> None:
        supported = set(ConfigLoader._PATH_KEYS) | set(ConfigLoader._BOOLEAN_KEYS)
        unknown = sorted(str(key) for key in payload.keys() if key not in supported)
        if unknown:
            raise ConfigError(
                f"{source_label} has unknown key(s): {', '.join(unknown)}.",
                hint=f"Supported keys: {', '.join(sorted(supported))}.",
            )
