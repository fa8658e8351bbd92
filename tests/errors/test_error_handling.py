"""
Tests for the error hierarchy.

Checks that each error carries its classification and context, and that
errors raised by the core surface where callers expect them.
"""

import pytest

from trading_places.data.models import TradingConfig
from trading_places.data.normalizer import SettlementNormalizer
from trading_places.datasets import DatasetRegistry
from trading_places.errors import (
    DatasetError,
    DatasetNameError,
    InvalidSeasonError,
    MalformedRecordError,
    MissingConfigurationError,
    ProtectedDatasetError,
    QuestionSourceError,
    TradingCalculationError,
    TradingDataError,
    UnknownDatasetError,
)
from trading_places.economy import calculate_cargo_slots


class TestDataQualityErrors:
    """Test record-level errors."""

    def test_malformed_record_is_recoverable(self):
        error = MalformedRecordError(
            "Settlement size is not a code or number",
            record_type="settlement",
            field="size",
            context={"value": {"code": "T"}},
        )

        assert isinstance(error, TradingDataError)
        assert error.recoverable
        assert error.record_type == "settlement"
        assert error.field == "size"
        assert error.context == {"value": {"code": "T"}}

    def test_default_context(self):
        assert TradingDataError("bad record").context == {}


class TestCalculationErrors:
    """Test calculation contract violations."""

    @pytest.mark.parametrize("error_class", [MissingConfigurationError, InvalidSeasonError])
    def test_calculation_errors_are_value_errors(self, error_class):
        error = error_class("boom")

        assert isinstance(error, TradingCalculationError)
        assert isinstance(error, ValueError)
        assert not error.recoverable

    def test_missing_configuration_from_core(self):
        with pytest.raises(ValueError):
            calculate_cargo_slots(None, "spring", None)

    def test_invalid_season_from_core(self):
        with pytest.raises(InvalidSeasonError) as exc_info:
            calculate_cargo_slots(None, "midwinter", TradingConfig())

        assert exc_info.value.season == "midwinter"


class TestDatasetErrors:
    """Test dataset registry errors."""

    def test_dataset_error_hierarchy(self):
        for error_class in (UnknownDatasetError, ProtectedDatasetError, DatasetNameError):
            assert issubclass(error_class, DatasetError)

    def test_dataset_name_error_lists_problems(self):
        registry = DatasetRegistry()

        with pytest.raises(DatasetNameError) as exc_info:
            registry.create("bad name!")

        assert exc_info.value.errors == [
            "Dataset name can only contain letters, numbers, hyphens, and underscores"
        ]
        assert "bad name!" in str(exc_info.value)

    def test_protected_dataset_carries_name(self):
        with pytest.raises(ProtectedDatasetError) as exc_info:
            DatasetRegistry().delete("wfrp4e")

        assert exc_info.value.dataset == "wfrp4e"

    def test_question_source_error(self):
        error = QuestionSourceError("Network error", source="https://example.com")

        assert error.source == "https://example.com"
        assert not isinstance(error, DatasetError)


def test_normalizer_reports_malformed_record():
    result = SettlementNormalizer().normalize({"size": "T"})

    assert isinstance(result.failure, TradingDataError)
    assert result.failure.context == {"region": None}
