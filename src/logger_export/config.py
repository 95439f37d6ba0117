"""
Logger Configuration.
"""


from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FILE_NAME = "elog.txt"


class LoggerConfig(BaseSettings):
    """Per-logger configuration, immutable once built.

    Values resolve in this order (later wins): field defaults, ``.env``,
    ``LOGGER_EXPORT_*`` environment variables, explicit keyword arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGGER_EXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    write_log_to_file: bool = Field(default=True, description="Append entries to the log file")
    write_log_to_console: bool = Field(default=True, description="Print entries to the console stream")
    error_method_count: int = Field(default=4, ge=0, description="Stack frames shown for errors and explicit traces")
    method_count: int = Field(default=0, ge=0, description="Stack frames captured when no trace is supplied")
    log_file_name: str = Field(default=DEFAULT_LOG_FILE_NAME, description="File name inside the documents directory")
    documents_dir: str | None = Field(default=None, description="Override for the platform documents directory")
    diagnostics: bool = Field(default=True, description="Report internal logger failures on the diagnostic channel")

    @field_validator("log_file_name")
    @classmethod
    def _check_log_file_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("log_file_name must not be empty")
        return value


__all__ = ["LoggerConfig", "DEFAULT_LOG_FILE_NAME"]
