"""Question bank parsing, random drawing and HTTP loading."""

import json
import random
import socket
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

import structlog

from ..config.defaults import QuestionParams
from ..errors import QuestionSourceError

logger = structlog.get_logger(__name__)

CATEGORIES = (
    "background",
    "motivations",
    "personality",
    "values",
    "relationships",
    "secrets",
    "weakness",
    "interests",
    "society",
)

# Entries are either plain strings or language maps such as {"en": ..., "de": ...}
QuestionEntry = Mapping[str, str]


@dataclass(frozen=True)
class DrawnQuestion:
    """One question drawn for a category."""
    category: str
    text: str


@dataclass(frozen=True)
class QuestionDraw:
    """Questions drawn in one request plus any shortfall warnings."""
    questions: tuple[DrawnQuestion, ...] = ()
    warnings: tuple[str, ...] = ()

    def for_category(self, category: str) -> list[str]:
        return [q.text for q in self.questions if q.category == category]


def clamp_question_count(count: Any, params: Optional[QuestionParams] = None) -> int:
    """Parse a requested question count and clamp it to the allowed range."""
    params = params or QuestionParams()
    try:
        number = int(count)
    except (TypeError, ValueError):
        number = 0
    if number == 0:
        number = params.min_questions
    return max(params.min_questions, min(number, params.max_questions))


def _entry(raw: Any) -> Optional[QuestionEntry]:
    if isinstance(raw, str):
        return MappingProxyType({"en": raw}) if raw else None
    if isinstance(raw, Mapping):
        texts = {str(k): str(v) for k, v in raw.items() if isinstance(v, str) and v}
        return MappingProxyType(texts) if texts else None
    return None


@dataclass(frozen=True)
class QuestionBank:
    """Questions grouped by category."""
    categories: Mapping[str, tuple[QuestionEntry, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_dict(cls, raw: Any) -> "QuestionBank":
        """
        Build a bank from the question JSON object.

        Raises:
            QuestionSourceError: If the payload is not an object
        """
        if not isinstance(raw, Mapping):
            raise QuestionSourceError(
                f"Question bank must be an object, got {type(raw).__name__}"
            )

        categories = {}
        for category, entries in raw.items():
            if not isinstance(entries, list):
                logger.debug("Skipping non-list question category", category=category)
                continue
            parsed = tuple(e for e in (_entry(item) for item in entries) if e is not None)
            categories[str(category)] = parsed
        return cls(categories=MappingProxyType(categories))

    def count(self, category: str) -> int:
        return len(self.categories.get(category, ()))

    def draw(
        self,
        categories: Iterable[str],
        count: Any = 1,
        language: Optional[str] = None,
        rng: Optional[random.Random] = None,
        params: Optional[QuestionParams] = None,
    ) -> QuestionDraw:
        """
        Draw random questions for each selected category.

        Questions are not repeated within a category. Text falls back to
        English when the requested language is missing. Categories absent
        from the bank are skipped.

        Args:
            categories: Selected category names
            count: Questions per category, clamped to the configured range
            language: Preferred language code
            rng: Random source (a fresh random.Random if omitted)
            params: Question generator parameters

        Returns:
            QuestionDraw with drawn questions and shortfall warnings
        """
        params = params or QuestionParams()
        rng = rng or random.Random()
        language = language or params.default_language
        wanted = clamp_question_count(count, params)

        questions = []
        warnings = []
        for category in categories:
            entries = self.categories.get(category)
            if not entries:
                continue

            if wanted > len(entries):
                warnings.append(
                    f"You've requested {wanted} questions for {category}, "
                    f"but there are only {len(entries)} questions available."
                )

            for entry in rng.sample(list(entries), min(wanted, len(entries))):
                text = entry.get(language) or entry.get("en") or next(iter(entry.values()))
                questions.append(DrawnQuestion(category=category, text=text))

        return QuestionDraw(questions=tuple(questions), warnings=tuple(warnings))


def fetch_question_bank(url: Optional[str] = None, timeout: Optional[float] = None) -> QuestionBank:
    """
    Fetch and parse the question bank over HTTP.

    Raises:
        QuestionSourceError: On network, HTTP or JSON errors
    """
    params = QuestionParams()
    url = url or params.source_url
    timeout = timeout if timeout is not None else params.fetch_timeout_seconds

    req = Request(url, headers={"User-Agent": "trading-places/1.0"})
    try:
        with urlopen(req, timeout=timeout) as response:
            payload = json.loads(response.read().decode("utf-8"))
    except HTTPError as e:
        logger.warning("Question bank HTTP error", url=url, error_code=e.code)
        raise QuestionSourceError(f"Error fetching JSON: HTTP {e.code} {e.reason}", source=url) from e
    except (OSError, URLError, socket.timeout) as e:
        logger.warning("Question bank network error", url=url, error=str(e))
        raise QuestionSourceError(f"Network error: {e}", source=url) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Question bank JSON error", url=url, error=str(e))
        raise QuestionSourceError(f"Invalid question JSON: {e}", source=url) from e

    bank = QuestionBank.from_dict(payload)
    logger.info("Question bank loaded", url=url, categories=len(bank.categories))
    return bank
