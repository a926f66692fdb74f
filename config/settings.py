from pydantic import Field
from pydantic_settings import BaseSettings


class BotSettings(BaseSettings):
    discord_token: str = Field(default="", description="Discord bot token")
    database_url: str = Field(default="sqlite:///data/gagbot.db", description="Database connection URL")

    bot_prefixes: list[str] = Field(default=["gb!"], description="Command prefixes accepted in every guild")
    allow_leading_whitespace: bool = Field(
        default=True, description="Allow whitespace between the prefix and the command name"
    )
    error_title: str = Field(default="Oops! Something went wrong.", description="Title of error replies")
    environment: str = Field(default="development", description="Environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Module configuration
    enabled_modules: list[str] = Field(
        default=["core", "admin"],
        description="List of enabled command modules",
    )
    module_directories: list[str] = Field(
        default=["plugins"],
        description="Directories to scan for command modules",
    )

    # Development settings
    debug: bool = Field(default=False, description="Enable debug mode")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = BotSettings()
