"""
Logging configuration for the catalog sync pipeline
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass
class FileHandlerConfig:
    """File handler configuration"""

    enabled: bool = False
    log_dir: str = "logs"
    max_file_size: int = 10485760  # 10MB
    backup_count: int = 5
    app_log_enabled: bool = True
    error_log_enabled: bool = True


@dataclass
class ConsoleHandlerConfig:
    """Console handler configuration"""

    enabled: bool = True
    level: str = "INFO"


class LoggingConfig(BaseModel):
    """Complete logging configuration"""

    level: str = "INFO"
    format: str = "console"  # console, json, structured or simple

    file: FileHandlerConfig = Field(default_factory=FileHandlerConfig)
    console: ConsoleHandlerConfig = Field(default_factory=ConsoleHandlerConfig)

    @classmethod
    def from_settings(cls, logging_settings) -> "LoggingConfig":
        """Build a logging config from LoggingSettings"""
        return cls(
            level=logging_settings.LOG_LEVEL,
            format=logging_settings.LOG_FORMAT,
            file=FileHandlerConfig(
                enabled=logging_settings.LOG_TO_FILE,
                log_dir=logging_settings.LOG_DIR,
            ),
            console=ConsoleHandlerConfig(level=logging_settings.LOG_LEVEL),
        )
