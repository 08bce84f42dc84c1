"""Subparser configuration loaded from environment variables.

Every field can be set as SUBPARSER_<FIELD> in the environment or in a .env
file; command-line flags take precedence over both.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class SubparserConfig(BaseSettings):
    """Subparser configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Variant selection
    parser: str = Field(
        default="effner",
        description="Parser to use (effner, effner-de)",
    )
    source: str = Field(
        default="file",
        description="Where the plan document comes from (file, dsb, effner)",
    )

    # Paths
    input: str = Field(
        default="",
        description="Input file, required for the file source",
    )
    output: str = Field(
        default="",
        description="Output file for the JSON plans; stdout when empty",
    )

    # DSBmobile credentials
    dsb_user: str = Field(
        default="",
        description="DSBmobile username",
    )
    dsb_pass: str = Field(
        default="",
        description="DSBmobile password",
    )
    dsb_base_url: str = Field(
        default="https://mobileapi.dsbcontrol.de",
        description="DSBmobile API base URL",
    )

    # effner.de protected page
    effner_password: str = Field(
        default="",
        description="Password of the protected substitution page on effner.de",
    )
    effner_login_url: str = Field(
        default="https://effner.de/wp-login.php?action=postpass",
        description="WordPress post-password endpoint",
    )
    effner_referer: str = Field(
        default="https://effner.de/service/vertretungsplan/",
        description="Page the post-password form is submitted from",
    )

    # HTTP settings
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for every HTTP request",
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts for requests failing with a transient error",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "SUBPARSER_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: SubparserConfig | None = None


def get_config() -> SubparserConfig:
    """Get the subparser configuration singleton.

    Returns:
        SubparserConfig: Subparser configuration instance
    """
    global _config
    if _config is None:
        _config = SubparserConfig()
    return _config
