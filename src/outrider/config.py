from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Literal, Self

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from outrider.constants import (
    EXPRESSION_BREAK_THRESHOLD,
    MAX_EXPRESSION_LINE_LENGTH,
    PAREN_BREAK_THRESHOLD,
)
from outrider.exceptions import ConfigError
from outrider.logging import get_logger

__all__ = [
    "OutriderConfig",
    "ExpressionFormatConfig",
    "load_config",
    "get_user_config_path",
    "PROJECT_CONFIG_FILENAME",
]

logger = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "outrider.yaml"


class ExpressionFormatConfig(BaseModel):
    """Settings for line breaking of generated condition expressions.

    Attributes:
        max_line_length: Expressions at or under this length stay on one line.
        break_threshold: Accumulated length after which a `&&`/`||` operator
            ends the current line.
        paren_break_threshold: Accumulated length after which a balanced
            parenthesis group followed by an operator ends the current line.
    """

    max_line_length: int = Field(default=MAX_EXPRESSION_LINE_LENGTH, ge=20, le=1000)
    break_threshold: int = Field(default=EXPRESSION_BREAK_THRESHOLD, ge=10, le=1000)
    paren_break_threshold: int = Field(default=PAREN_BREAK_THRESHOLD, ge=10, le=1000)

    @model_validator(mode="after")
    def check_thresholds(self) -> Self:
        if self.break_threshold > self.max_line_length:
            raise ValueError(
                "break_threshold must not exceed max_line_length "
                f"({self.break_threshold} > {self.max_line_length})"
            )
        return self


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
                    if loaded is None:
                        logger.warning(
                            f"Config file {yaml_file} is empty, using defaults."
                        )
                    elif isinstance(loaded, dict):
                        self._config_data = loaded
                    else:
                        raise ConfigError(
                            message=f"Config file {yaml_file} must contain a mapping",
                            value=type(loaded).__name__,
                        )
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class OutriderConfig(BaseSettings):
    """Root configuration object containing all Outrider settings."""

    model_config = SettingsConfigDict(
        env_prefix="OUTRIDER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    expressions: ExpressionFormatConfig = Field(default_factory=ExpressionFormatConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    #: Project config file read by the YAML source; set by load_config().
    project_config_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init settings (explicit keyword arguments)
        2. Environment variables (OUTRIDER_*)
        3. Project YAML config (./outrider.yaml or --config path)
        4. User YAML config (~/.config/outrider/config.yaml)
        """
        project_config_path = (
            cls.project_config_path or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/outrider/config.yaml
    """
    return Path.home() / ".config" / "outrider" / "config.yaml"


def load_config(config_path: Path | None = None) -> OutriderConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to project config file.
            Defaults to ./outrider.yaml

    Returns:
        OutriderConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("No project configuration found, using defaults.")

    # Bound per call so concurrent loads never share the project path.
    class _ProjectConfig(OutriderConfig):
        project_config_path: ClassVar[Path | None] = config_path

    try:
        return _ProjectConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
