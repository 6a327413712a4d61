"""Configuration models for the reading log batch."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LLMSettings(BaseModel):
    """Extraction model settings"""

    model_config = ConfigDict(protected_namespaces=())

    provider: Literal["anthropic"] = "anthropic"
    model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = Field(1024, ge=256, le=8192)
    api_key: Optional[str] = Field(
        None, description="Falls back to ANTHROPIC_API_KEY when unset"
    )
    timeout_seconds: float = Field(120.0, gt=0, le=600)

    @field_validator("api_key")
    @classmethod
    def blank_key_is_unset(cls, v: Optional[str]) -> Optional[str]:
        # Unresolved ${ANTHROPIC_API_KEY} substitutions land here verbatim
        if v is None or not v.strip() or v.startswith("${"):
            return None
        return v


class ConversionSettings(BaseModel):
    """HEIC to JPEG conversion utility settings"""

    command: List[str] = Field(
        default_factory=lambda: ["sips", "-s", "format", "jpeg"],
        min_length=1,
        description="Converter argv; source path, output_flag and dest are appended",
    )
    output_flag: str = Field("--out", description="Empty when dest is positional")
    timeout_seconds: int = Field(60, ge=1, le=600)


class AppConfig(BaseModel):
    """Top-level application settings"""

    input_dir: str = "."
    progress_file: str = ".progress.json"
    output_file: str = "reading_logs.csv"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_json: bool = False
    llm: LLMSettings = Field(default_factory=LLMSettings)
    conversion: ConversionSettings = Field(default_factory=ConversionSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v
