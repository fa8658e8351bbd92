"""Default configuration parameters for the trading economy engine."""

from dataclasses import dataclass, field


def _default_base_per_size() -> dict[int, float]:
    return {1: 1, 2: 2, 3: 3, 4: 4, 5: 5}


@dataclass(frozen=True)
class CargoSlotDefaults:
    """Cargo slot parameters used for newly created datasets."""
    base_per_size: dict[int, float] = field(default_factory=_default_base_per_size)
    population_multiplier: float = 0.001             # Slots per inhabitant
    size_multiplier: float = 0.5                     # Slots per size rating
    hard_cap: float = 20                             # Upper clamp before rounding
    flag_multipliers: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class EngineParams:
    """Engine-level runtime parameters."""
    default_season: str = "spring"
    default_dataset: str = "wfrp4e"


@dataclass(frozen=True)
class QuestionParams:
    """Character question generator parameters."""
    min_questions: int = 1
    max_questions: int = 10
    default_language: str = "en"
    source_url: str = "https://raw.githubusercontent.com/orangebutblue/CharacterQuestions/main/questions.json"
    fetch_timeout_seconds: float = 10.0


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    cargo_slots: CargoSlotDefaults
    engine: EngineParams
    questions: QuestionParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        cargo_slots=CargoSlotDefaults(),
        engine=EngineParams(),
        questions=QuestionParams(),
    )
