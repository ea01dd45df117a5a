"""Configuration loader for language stop-word profiles."""

import logging
import os
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from ld_proto.app.config import DEFAULT_PROFILES_PATH
from ld_proto.app.models import UNKNOWN_LANGUAGE, LanguageProfile

logger = logging.getLogger(__name__)


def load_language_profiles(
    config_path: str | Path | None = None,
) -> list[LanguageProfile]:
    """Load language profiles from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.
            If None, the profiles shipped with the package are used.

    Returns:
        List of LanguageProfile instances in file order.

    Raises:
        FileNotFoundError: If the configuration file cannot be found.
        ValueError: If the configuration is invalid.
    """
    if config_path is None:
        config_path = DEFAULT_PROFILES_PATH

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Language profile configuration not found at {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        profiles = [LanguageProfile(**entry) for entry in config.get("languages", [])]
    except (yaml.YAMLError, ValidationError, TypeError, AttributeError) as e:
        logger.error("Error loading language profiles: %s", str(e))
        raise ValueError(f"Invalid language profile configuration: {str(e)}") from e

    _validate_codes(profiles)
    for profile in profiles:
        logger.info(
            "Loaded profile %s with %d stop-words", profile.code, len(profile.stop_words)
        )
    return profiles


def _validate_codes(profiles: list[LanguageProfile]) -> None:
    if not profiles:
        raise ValueError("Invalid language profile configuration: no languages defined")

    seen: set[str] = set()
    for profile in profiles:
        if profile.code == UNKNOWN_LANGUAGE:
            raise ValueError(
                f"Invalid language profile configuration: '{UNKNOWN_LANGUAGE}' is reserved"
            )
        if profile.code in seen:
            raise ValueError(
                f"Invalid language profile configuration: duplicate code '{profile.code}'"
            )
        seen.add(profile.code)
