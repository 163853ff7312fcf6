"""Unit tests for domain value types."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from pantry.domain.value import (
    ModerationState,
    ModerationStatus,
    RatingSummary,
    RecipeAggregate,
    RecipeFilter,
    Role,
)


class TestRole:
    """Tests for the role capability order."""

    def test_ranks_are_totally_ordered(self):
        ranks = [role.rank for role in (Role.USER, Role.MODERATOR, Role.ADMIN, Role.OWNER)]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 4

    @pytest.mark.parametrize(
        "role,required,expected",
        [
            (Role.USER, Role.USER, True),
            (Role.USER, Role.MODERATOR, False),
            (Role.MODERATOR, Role.MODERATOR, True),
            (Role.MODERATOR, Role.ADMIN, False),
            (Role.ADMIN, Role.MODERATOR, True),
            (Role.ADMIN, Role.ADMIN, True),
            (Role.OWNER, Role.ADMIN, True),
        ],
    )
    def test_satisfies(self, role, required, expected):
        assert role.satisfies(required) is expected

    def test_unknown_role_token_rejected(self):
        with pytest.raises(ValueError):
            Role("superuser")


class TestModerationState:
    """Tests for the coupled status and publication flag."""

    @pytest.mark.parametrize(
        "status,published",
        [
            (ModerationStatus.PENDING, False),
            (ModerationStatus.APPROVED, True),
            (ModerationStatus.REJECTED, False),
        ],
    )
    def test_for_status_derives_publication(self, status, published):
        state = ModerationState.for_status(status)
        assert state.status == status
        assert state.is_published is published

    def test_inconsistent_pair_rejected(self):
        with pytest.raises(ValidationError):
            ModerationState(status=ModerationStatus.PENDING, is_published=True)


class TestRecipeAggregate:
    """Tests for aggregate computation from a rating summary."""

    def test_empty_summary_gives_zero(self):
        aggregate = RecipeAggregate.from_summary(RatingSummary(count=0, total=0))
        assert aggregate.rating == Decimal("0.00")
        assert aggregate.review_count == 0

    def test_average_has_two_decimal_places(self):
        aggregate = RecipeAggregate.from_summary(RatingSummary(count=3, total=13))
        assert aggregate.rating == Decimal("4.33")
        assert aggregate.review_count == 3

    def test_half_rounds_up(self):
        # 21 / 8 = 2.625
        aggregate = RecipeAggregate.from_summary(RatingSummary(count=8, total=21))
        assert aggregate.rating == Decimal("2.63")


class TestRecipeFilter:
    """Tests for the recipe listing text criteria."""

    def test_empty_filter_matches_everything(self):
        assert RecipeFilter().matches("Focaccia", None, "marco") is True

    def test_search_covers_title_and_description(self):
        criteria = RecipeFilter(search="ROSEMARY")

        assert criteria.matches("Rosemary Focaccia", None, "marco") is True
        assert criteria.matches("Focaccia", "Topped with rosemary", "marco") is True
        assert criteria.matches("Focaccia", None, "marco") is False

    def test_author_is_a_username_substring(self):
        criteria = RecipeFilter(author="MAR")

        assert criteria.matches("Focaccia", None, "marco") is True
        assert criteria.matches("Focaccia", None, "giulia") is False
