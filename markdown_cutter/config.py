"""Configuration system for Markdown Cutter."""

from pydantic import Field
from pydantic_settings import BaseSettings


class CutterSettings(BaseSettings):
    """Default limits and output options for cutter instances."""

    # Limits
    text_limit: int = Field(
        default=140,
        ge=0,
        description="Maximum display length of the cut text",
    )
    image_limit: int = Field(
        default=1,
        ge=0,
        description="Maximum number of image references kept",
    )
    link_limit: int = Field(
        default=1,
        ge=0,
        description="Maximum number of link references kept",
    )

    # Output
    suffix: str = Field(
        default="",
        description="Marker appended when the text was truncated",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit log records as JSON lines",
    )

    model_config = {
        "env_prefix": "MARKDOWN_CUTTER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def default_limits(self) -> dict[str, int]:
        """Return the limits mapping a cutter starts from."""
        return {
            "text": self.text_limit,
            "image": self.image_limit,
            "link": self.link_limit,
        }


# Settings singleton with dependency injection support
_settings: CutterSettings | None = None


def get_settings() -> CutterSettings:
    """Get the settings instance (lazy-loaded singleton).

    Returns:
        The CutterSettings instance.

    Example:
        from markdown_cutter.config import get_settings
        settings = get_settings()
        print(settings.text_limit)
    """
    global _settings
    if _settings is None:
        _settings = CutterSettings()
    return _settings


def override_settings(new_settings: CutterSettings) -> None:
    """Override the settings instance (for testing).

    Args:
        new_settings: The new CutterSettings instance to use.
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to None (forces reload on next get_settings call)."""
    global _settings
    _settings = None
