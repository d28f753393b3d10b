"""Stream monetization policy and payout calculation.

A stream is monetized when it played for at least the threshold (30 seconds by
default; exactly 30 seconds counts). A payout is the number of unpaid
monetized streams times a fixed positive per-stream rate.
"""

from collections.abc import Collection
from decimal import Decimal

from attrs import define, field, validators

from .entities import Monetized, PaymentAmount, StreamDuration, StreamId
from .errors import DomainValidationError, InvariantViolationError

DEFAULT_THRESHOLD_SECONDS = 30
DEFAULT_RATE_PER_STREAM = Decimal("0.003")


@define(frozen=True, slots=True)
class MonetizationPolicy:
    """Classifies playback events as monetized or not."""

    threshold_seconds: int = field(
        default=DEFAULT_THRESHOLD_SECONDS,
        validator=[validators.instance_of(int), validators.gt(0)],
    )

    def classify(self, duration: StreamDuration) -> Monetized:
        return Monetized.from_bool(duration.seconds >= self.threshold_seconds)


def _positive_rate(instance, attribute, value: Decimal) -> None:
    if not isinstance(value, Decimal) or not value > 0:
        raise DomainValidationError(attribute.name, f"must be a positive Decimal, got {value!r}")


@define(frozen=True, slots=True)
class PaymentCalculator:
    """Turns a set of unpaid monetized streams into a payable amount."""

    rate_per_stream: Decimal = field(
        default=DEFAULT_RATE_PER_STREAM, validator=_positive_rate
    )

    def calculate(self, stream_ids: Collection[StreamId]) -> PaymentAmount:
        """Amount owed for ``stream_ids``.

        Callers guarantee a non-empty input, so the product is always
        positive. Anything else means the caller broke that guarantee.

        Raises:
            InvariantViolationError: the computed amount is not positive
        """
        amount = len(stream_ids) * self.rate_per_stream
        if amount <= 0:
            raise InvariantViolationError(
                f"Payment amount must be positive, computed {amount} for "
                f"{len(stream_ids)} streams at {self.rate_per_stream} per stream"
            )
        return PaymentAmount(amount)
