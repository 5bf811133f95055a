"""Unit tests for PaginationResolver and PageWindow."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kuhi_query.application.query import FilterRequest, PageWindow, PaginationResolver
from kuhi_query.config.settings import QuerySettings
from kuhi_query.kernel.errors import InvariantViolationError


class TestPaginationResolver:
    def test_defaults(self) -> None:
        assert PaginationResolver().resolve(FilterRequest()) == PageWindow(50, 0)

    def test_explicit_values(self) -> None:
        assert PaginationResolver().resolve(FilterRequest(limit=10, offset=20)) == PageWindow(10, 20)

    def test_negative_clamped_to_zero(self) -> None:
        assert PaginationResolver().resolve(FilterRequest(limit=-5, offset=-1)) == PageWindow(0, 0)

    def test_limit_capped(self) -> None:
        assert PaginationResolver().resolve(FilterRequest(limit=5000)).limit == 1000

    def test_zero_limit_allowed(self) -> None:
        assert PaginationResolver().resolve(FilterRequest(limit=0)).limit == 0

    def test_from_settings(self) -> None:
        resolver = PaginationResolver.from_settings(QuerySettings(default_limit=20, max_limit=100))
        assert resolver.resolve(FilterRequest()) == PageWindow(20, 0)
        assert resolver.resolve(FilterRequest(limit=500)).limit == 100

    def test_bad_bounds_rejected(self) -> None:
        with pytest.raises(InvariantViolationError):
            PaginationResolver(default_limit=100, max_limit=10)

    @given(st.integers(), st.integers())
    def test_window_always_in_range(self, limit: int, offset: int) -> None:
        window = PaginationResolver().resolve(FilterRequest(limit=limit, offset=offset))
        assert 0 <= window.limit <= 1000
        assert window.offset >= 0


class TestPageWindow:
    def test_slice(self) -> None:
        assert PageWindow(2, 1).slice([1, 2, 3, 4]) == [2, 3]

    def test_slice_past_end(self) -> None:
        assert PageWindow(5, 10).slice([1, 2]) == []

    def test_negative_rejected(self) -> None:
        with pytest.raises(InvariantViolationError):
            PageWindow(-1, 0)
