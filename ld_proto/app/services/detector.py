"""Word-list language detector.

Scores a document against per-language stop-word lists. Each token that
equals a stop-word of a language counts as one match for that language, and
a language's confidence is its match count divided by the number of tokens.

Languages are ranked by confidence, highest first, with ties broken by
language code, so both the primary prediction and the order of the
alternatives are deterministic for a given text.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from ld_proto.app.config import settings
from ld_proto.app.models import (
    UNKNOWN_LANGUAGE,
    Detection,
    LanguageAlternative,
    LanguageProfile,
)
from ld_proto.app.prometheus import track_detected_language
from ld_proto.app.services.config_loader import load_language_profiles

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"\w+")


def clamp_confidence(value: float) -> float:
    """Clamp a raw score into the closed interval [0.0, 1.0]."""
    return min(max(value, 0.0), 1.0)


def tokenize(text: str) -> list[str]:
    """Split text into lower-case word tokens, dropping punctuation."""
    return _TOKEN_PATTERN.findall(text.lower())


class WordListDetector:
    """Detect languages by counting stop-word matches.

    Attributes:
        profiles: The language profiles in configuration order.
        fallback_language: Code reported when the text has tokens but no
            stop-word matched.
    """

    def __init__(
        self, profiles: Iterable[LanguageProfile], fallback_language: str = "en"
    ) -> None:
        self.profiles = list(profiles)
        self.fallback_language = fallback_language
        self._stop_words = {
            profile.code: frozenset(profile.stop_words) for profile in self.profiles
        }

    @property
    def languages(self) -> list[str]:
        return [profile.code for profile in self.profiles]

    def score(self, tokens: list[str]) -> dict[str, int]:
        """Count stop-word matches per language, omitting languages with none."""
        scores: dict[str, int] = {}
        for token in tokens:
            for code, stop_words in self._stop_words.items():
                if token in stop_words:
                    scores[code] = scores.get(code, 0) + 1
        return scores

    def detect(self, text: str) -> Detection:
        """Detect the language of a text.

        Args:
            text: The document content. May be empty.

        Returns:
            Detection with the primary language, its confidence and the
            remaining languages that matched at least once. Text without
            tokens yields the "unknown" sentinel with confidence 0.0.
        """
        tokens = tokenize(text)
        if not tokens:
            return Detection(language_code=UNKNOWN_LANGUAGE, confidence=0.0)

        scores = self.score(tokens)
        if not scores:
            return Detection(language_code=self.fallback_language, confidence=0.0)

        total = len(tokens)
        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        best_code, best_score = ranked[0]

        alternatives = [
            LanguageAlternative(
                language_code=code, confidence=clamp_confidence(score / total)
            )
            for code, score in ranked[1:]
        ]
        return Detection(
            language_code=best_code,
            confidence=clamp_confidence(best_score / total),
            alternatives=alternatives,
        )


@lru_cache()
def get_detector(
    profiles_path: Path | None = None, fallback_language: str | None = None
) -> WordListDetector:
    """Creates and caches the detector from the configured language profiles.

    Args:
        profiles_path: Profile YAML file. Defaults to the configured path.
        fallback_language: Defaults to the configured fallback language.

    Returns:
        WordListDetector: The detector for the loaded profiles.

    Raises:
        FileNotFoundError: If the profile file does not exist.
        ValueError: If the profile file is invalid.
    """
    path = profiles_path or settings.profiles_path
    try:
        logger.info("Loading language profiles from %s", path)
        detector = WordListDetector(
            load_language_profiles(path),
            fallback_language=fallback_language or settings.FALLBACK_LANGUAGE,
        )
        logger.info("Detector created for languages: %s", ", ".join(detector.languages))
        return detector
    except Exception as e:
        logger.error("Error creating detector: %s", str(e))
        raise


def detect_with_metrics(detector: WordListDetector, text: str) -> Detection:
    """Detects the language of a text and records metrics.

    Args:
        detector: The detector instance
        text: The text to classify

    Returns:
        The Detection result
    """
    detection = detector.detect(text)
    track_detected_language(detection.language_code)
    return detection
