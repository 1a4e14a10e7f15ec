"""
Configuration module for schema-form.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class FormConfig:
    """Configuration settings for schema-form."""

    # Demo server settings
    server_host: str = "127.0.0.1"
    server_port: int = 9110
    forms_dir: str = "examples"

    # Rendering settings
    long_text_threshold: int = 200  # maxLength above this renders a textarea
    required_marker: str = " *"

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls) -> "FormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            server_host=os.getenv("SCHEMA_FORM_HOST", _defaults.server_host),
            server_port=int(os.getenv("SCHEMA_FORM_PORT", str(_defaults.server_port))),
            forms_dir=os.getenv("SCHEMA_FORM_FORMS_DIR", _defaults.forms_dir),
            long_text_threshold=int(
                os.getenv("SCHEMA_FORM_LONG_TEXT_THRESHOLD", str(_defaults.long_text_threshold))
            ),
            required_marker=os.getenv("SCHEMA_FORM_REQUIRED_MARKER", _defaults.required_marker),
            log_level=os.getenv("SCHEMA_FORM_LOG_LEVEL", _defaults.log_level).upper(),
            debug=os.getenv("SCHEMA_FORM_DEBUG", str(_defaults.debug).lower()).lower() == "true",
        )


config = FormConfig.from_env()


def get_config() -> FormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
