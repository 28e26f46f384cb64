"""Configuration management for the MCP handler kit."""

import os
from typing import Literal
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# 載入 .env 檔案，支援多種路徑策略
_env_loaded = False

# 優先使用環境變數指定的路徑
env_file = os.getenv('ENV_FILE_PATH')
if env_file and Path(env_file).exists():
    load_dotenv(env_file, override=False)
    _env_loaded = True
else:
    possible_paths = [
        Path.cwd() / '.env',  # 當前工作目錄
        Path(__file__).parent.parent.parent / '.env',  # 專案根目錄
    ]
    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(str(env_path), override=False)
            _env_loaded = True
            break

if not _env_loaded:
    load_dotenv()


LogFormat = Literal["text", "json"]


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class LoggingConfig(BaseModel):
    """Logging sink configuration."""

    level: str = Field(default="INFO", description="Root log level")
    log_format: LogFormat = Field(default="text", description="text or json context rendering")
    environment: str = Field(default="development", description="Deployment environment")
    log_dir: str = Field(default="logs", description="Directory for file logs in production")
    slow_operation_ms: int = Field(
        default=5000,
        description="Performance events above this duration are logged as warnings"
    )

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create logging configuration from environment variables."""
        log_format = os.getenv("LOG_FORMAT", "text").lower()
        return cls(
            level=os.getenv("LOG_LEVEL", "info").upper(),
            log_format="json" if log_format == "json" else "text",
            environment=os.getenv("ENVIRONMENT", "development"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            slow_operation_ms=int(os.getenv("SLOW_OPERATION_MS", "5000"))
        )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


class WrapperConfig(BaseModel):
    """Defaults applied by the handler wrappers."""

    default_domain: str = Field(
        default="confluence",
        description="Domain tag passed to the validation error builder"
    )
    sanitize_response: bool = Field(
        default=True,
        description="Default for HandlerOptions.sanitize_response"
    )

    @classmethod
    def from_env(cls) -> "WrapperConfig":
        """Create wrapper configuration from environment variables."""
        return cls(
            default_domain=os.getenv("DEFAULT_TOOL_DOMAIN", "confluence"),
            sanitize_response=_env_flag("RESPONSE_SANITIZATION", "true")
        )


class AppConfig(BaseModel):
    """Application configuration combining all configs."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    wrapper: WrapperConfig = Field(default_factory=WrapperConfig)
    server_name: str = Field(default="mcp-handler-kit", description="MCP server name identifier")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create full application configuration from environment variables."""
        return cls(
            logging=LoggingConfig.from_env(),
            wrapper=WrapperConfig.from_env(),
            server_name=os.getenv("MCP_SERVER_NAME", "mcp-handler-kit")
        )
