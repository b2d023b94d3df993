"""Configuration management using Pydantic Settings"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration"""
    name: str = Field(default="tathmini-engine", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class EngineConfig(BaseSettings):
    """Validation and aggregation engine configuration"""
    reserved_prefix: str = Field(default="_", alias="RESERVED_PREFIX")
    status_field: str = Field(default="status", alias="STATUS_FIELD")
    complete_status: str = Field(default="complete", alias="COMPLETE_STATUS")
    field_discovery: str = Field(default="first_record", alias="FIELD_DISCOVERY")
    completion_rate_precision: int = Field(default=1, ge=0, alias="COMPLETION_RATE_PRECISION")

    @field_validator("field_discovery")
    @classmethod
    def validate_field_discovery(cls, v: str) -> str:
        valid_modes = ["first_record", "union"]
        if v.lower() not in valid_modes:
            raise ValueError(f"FIELD_DISCOVERY must be one of {valid_modes}")
        return v.lower()

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Settings(BaseSettings):
    """Global settings"""
    app: AppConfig = Field(default_factory=AppConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Global settings instance
settings = Settings()
