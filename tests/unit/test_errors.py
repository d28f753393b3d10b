"""Error hierarchy and use case boundary logging tests."""

import pytest

from music_distribution.application.utilities import use_case_boundary
from music_distribution.domain.errors import (
    DomainValidationError,
    ErrorCategory,
    InvalidArgumentError,
    InvalidStateError,
    InvariantViolationError,
    MusicDistributionError,
    NotFoundError,
    PolicyViolationError,
    UnlabeledArtistError,
)


class TestErrorHierarchy:
    """Categories drive how a host reports each failure."""

    @pytest.mark.parametrize(
        ("error", "category"),
        [
            (NotFoundError("Song", "s-1"), ErrorCategory.NOT_FOUND),
            (InvalidStateError("wrong status"), ErrorCategory.INVALID_STATE),
            (InvalidArgumentError("bad date"), ErrorCategory.INVALID_ARGUMENT),
            (DomainValidationError("title", "blank"), ErrorCategory.INVALID_ARGUMENT),
            (PolicyViolationError("wrong label"), ErrorCategory.POLICY_VIOLATION),
            (UnlabeledArtistError("a-1"), ErrorCategory.POLICY_VIOLATION),
            (InvariantViolationError("zero payment"), ErrorCategory.INVARIANT),
        ],
    )
    def test_categories(self, error, category):
        assert isinstance(error, MusicDistributionError)
        assert error.category is category
        assert error.is_expected == (category is not ErrorCategory.INVARIANT)

    def test_builtin_compatibility(self):
        assert isinstance(NotFoundError("Song", "s-1"), LookupError)
        assert isinstance(DomainValidationError("title", "blank"), ValueError)
        assert isinstance(InvariantViolationError("boom"), RuntimeError)

    def test_as_dict(self):
        error = NotFoundError("Release", "r-9")
        assert error.as_dict() == {
            "code": "NOT_FOUND",
            "category": "not_found",
            "message": "Release not found: r-9",
        }
        assert error.entity == "Release"


class TestUseCaseBoundary:
    """The boundary logs once and always re-raises."""

    async def test_success_passes_through(self, log_records):
        @use_case_boundary("answer")
        async def answer():
            return 42

        assert await answer() == 42
        assert log_records == []

    async def test_expected_rejection_logs_warning(self, log_records):
        @use_case_boundary("distribute_release")
        async def distribute():
            raise InvalidStateError("Can only distribute approved releases {status}")

        with pytest.raises(InvalidStateError):
            await distribute()
        assert log_records == [
            "WARNING|distribute_release rejected: "
            "Can only distribute approved releases {status}"
        ]

    async def test_invariant_violation_logs_error(self, log_records):
        @use_case_boundary()
        async def file_for_payment():
            raise InvariantViolationError("zero payment")

        with pytest.raises(InvariantViolationError):
            await file_for_payment()
        assert log_records == ["ERROR|file_for_payment hit an invariant violation: zero payment"]

    async def test_unexpected_errors_are_reraised(self, log_records):
        @use_case_boundary("save")
        async def save():
            raise ConnectionError("storage unavailable")

        with pytest.raises(ConnectionError):
            await save()
        assert log_records == ["ERROR|Error in save: storage unavailable"]
