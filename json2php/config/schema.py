from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ConfigDict, field_validator


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    output_dir: Path = Field(default=Path("./output"))
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not normalized:
            raise ValueError("log_level cannot be empty")
        return normalized


class ConvertConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sanitize: bool = True


class ExportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    json_filename: str = "formatted.json"
    php_filename: str = "array.php"
    php_open_tag: bool = False

    @field_validator("json_filename", "php_filename")
    @classmethod
    def _bare_filename(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("export filenames cannot be empty")
        if "/" in stripped or "\\" in stripped or stripped in {".", ".."}:
            raise ValueError("export filenames must not contain path separators")
        return stripped


class ObservabilityConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    log_invalid_payload: bool = True
    invalid_payload_max_chars: int = 2000

    @field_validator("invalid_payload_max_chars")
    @classmethod
    def _non_negative_chars(cls, value: int) -> int:
        if value < 0:
            raise ValueError("invalid_payload_max_chars must be non-negative")
        return value


class AppConfigRoot(BaseModel):
    model_config = ConfigDict(extra="forbid")

    app: AppConfig = AppConfig()
    convert: ConvertConfig = ConvertConfig()
    export: ExportConfig = ExportConfig()
    observability: ObservabilityConfig = ObservabilityConfig()


def resolve_paths(config: AppConfigRoot, base_dir: Path) -> AppConfigRoot:
    def _resolve(path_value: Path) -> Path:
        return path_value if path_value.is_absolute() else (base_dir / path_value).resolve()

    config.app.output_dir = _resolve(config.app.output_dir)
    return config
