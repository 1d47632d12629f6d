"""
pageform configuration using pydantic-settings.

All settings can be set via environment variables with PAGEFORM_ prefix,
or via Docker secrets in /run/secrets directory.
"""

from anystore.settings import BaseSettings
from pydantic import Field
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """
    pageform configuration using pydantic-settings.

    Settings are loaded from (in order of priority, highest first):
    1. Environment variables with PAGEFORM_ prefix
    2. .env file
    3. Docker secrets in /run/secrets directory
    """

    model_config = SettingsConfigDict(
        env_prefix="pageform_",
        env_nested_delimiter="__",
        env_file=".env",
        secrets_dir="/run/secrets",
        extra="ignore",
    )

    debug: bool = Field(default=False)

    # Form behavior
    default_method: str = Field(
        default="GET", description="Method of forms without a method attribute"
    )
    validate_choices: bool = Field(
        default=True,
        description="Reject select and radio values that are not an option",
    )
