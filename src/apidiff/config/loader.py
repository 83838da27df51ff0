"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (APIDIFF__SECTION__KEY)
3. Project config (.apidiff/config.yaml, or an explicit config path)
4. Global config (~/.config/apidiff/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from apidiff.config.models import ApiDiffConfig, DiffConfig, LoggingConfig
from apidiff.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/apidiff/config.yaml").expanduser()
PROJECT_CONFIG_NAME = Path(".apidiff") / "config.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source."""

    class ApiDiffSettings(BaseSettings):
        """Root config. Env vars: APIDIFF__LOGGING__LEVEL, APIDIFF__DIFF__..., etc."""

        model_config = SettingsConfigDict(
            env_prefix="APIDIFF__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        diff: DiffConfig = DiffConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return ApiDiffSettings


def load_config(
    project_root: Path | None = None,
    config_path: Path | None = None,
    **kwargs: Any,
) -> ApiDiffConfig:
    """Load config: defaults < global yaml < project yaml < env vars < kwargs.

    Args:
        project_root: Directory holding .apidiff/config.yaml.
                      Defaults to current working directory.
        config_path: Explicit project config file; must exist.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On a missing explicit config file, invalid YAML syntax,
            or validation errors.
    """
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError.file_not_found(str(config_path))
        project_file = config_path
    else:
        project_file = (project_root or Path.cwd()) / PROJECT_CONFIG_NAME

    yaml_config = _deep_merge(_load_yaml(GLOBAL_CONFIG_PATH), _load_yaml(project_file))

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return ApiDiffConfig.model_validate(settings.model_dump())
