"""Monetization policy and payment calculator tests."""

from decimal import Decimal

from hypothesis import given, strategies as st
import pytest

from music_distribution.domain.entities import Monetized, StreamDuration, StreamId
from music_distribution.domain.errors import DomainValidationError, InvariantViolationError
from music_distribution.domain.monetization import (
    DEFAULT_RATE_PER_STREAM,
    DEFAULT_THRESHOLD_SECONDS,
    MonetizationPolicy,
    PaymentCalculator,
)


class TestMonetizationPolicy:
    """Streams of at least the threshold are monetized."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(29, Monetized.NO), (30, Monetized.YES), (31, Monetized.YES)],
    )
    def test_boundary(self, seconds, expected):
        assert MonetizationPolicy().classify(StreamDuration(seconds)) is expected

    @given(seconds=st.integers(min_value=1, max_value=24 * 60 * 60))
    def test_classification_matches_threshold(self, seconds):
        monetized = MonetizationPolicy().classify(StreamDuration(seconds))
        assert monetized.as_bool == (seconds >= DEFAULT_THRESHOLD_SECONDS)

    def test_custom_threshold(self):
        policy = MonetizationPolicy(threshold_seconds=45)
        assert policy.classify(StreamDuration(44)) is Monetized.NO
        assert policy.classify(StreamDuration(45)) is Monetized.YES

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValueError):
            MonetizationPolicy(threshold_seconds=0)


class TestPaymentCalculator:
    """Amount is the stream count times the per-stream rate."""

    def test_single_stream_pays_the_rate(self):
        amount = PaymentCalculator().calculate([StreamId.generate()])
        assert amount.value == DEFAULT_RATE_PER_STREAM == Decimal("0.003")

    @given(count=st.integers(min_value=1, max_value=10_000))
    def test_amount_is_count_times_rate(self, count):
        stream_ids = [StreamId.generate() for _ in range(count)]
        amount = PaymentCalculator().calculate(stream_ids)
        assert amount.value == count * Decimal("0.003")

    def test_exact_decimal_arithmetic(self):
        amount = PaymentCalculator(Decimal("0.1")).calculate(
            [StreamId.generate() for _ in range(3)]
        )
        assert amount.value == Decimal("0.3")

    def test_empty_input_is_an_invariant_violation(self):
        with pytest.raises(InvariantViolationError, match="must be positive"):
            PaymentCalculator().calculate([])

    @pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-0.003"), 0.003])
    def test_rate_must_be_positive_decimal(self, rate):
        with pytest.raises(DomainValidationError):
            PaymentCalculator(rate_per_stream=rate)
