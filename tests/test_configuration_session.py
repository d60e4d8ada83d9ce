"""
Unit tests for the configuration session state machine.
"""

import pytest

from core.exceptions import InvalidChoiceError, SessionClosedError
from models.product import Product
from models.selection import PackagingChoice, StyleChoice, ThemeChoice, TypographyChoice
from services.batch import Batch
from services.configuration_session import (
    ConfigurationSession,
    ConfigurationStep,
    ValidationFailure,
)


# Fixtures

@pytest.fixture
def product():
    return Product(product_id=1, name="Red Apple Kush", price=420, category="Hybrid")


@pytest.fixture
def session(product):
    return ConfigurationSession(product)


@pytest.fixture
def batch():
    return Batch()


def _walk_to_review(session):
    session.select_media(0)
    for _ in range(3):
        assert session.advance().ok
    assert session.step is ConfigurationStep.REVIEW_AND_CONFIRM


class TestInitialState:

    def test_starts_at_media_selection(self, session):
        assert session.step is ConfigurationStep.MEDIA_SELECTION
        assert session.selection.media_refs == []
        assert session.selection.quantity == 1
        assert session.is_closed is False

    def test_step_order(self):
        assert [s.value for s in ConfigurationStep] == [0, 1, 2, 3]
        assert ConfigurationStep.MEDIA_SELECTION.previous_step is None
        assert ConfigurationStep.REVIEW_AND_CONFIRM.next_step is None


class TestAdvanceGuards:

    def test_media_step_requires_media(self, session):
        result = session.advance()

        assert result.ok is False
        assert result.failure is ValidationFailure.MEDIA_REQUIRED
        assert session.step is ConfigurationStep.MEDIA_SELECTION

    def test_media_step_passes_with_one_media(self, session):
        session.select_media(4)
        result = session.advance()

        assert result.ok is True
        assert result.step is ConfigurationStep.STYLE_AND_BRANDING

    def test_style_and_packaging_steps_have_no_guard(self, session):
        session.select_media(0)
        session.advance()

        assert session.advance().ok
        assert session.step is ConfigurationStep.PACKAGING_AND_QUANTITY
        assert session.advance().ok
        assert session.step is ConfigurationStep.REVIEW_AND_CONFIRM

    def test_review_is_terminal_for_advance(self, session):
        _walk_to_review(session)
        result = session.advance()

        assert result.ok is False
        assert result.failure is ValidationFailure.TERMINAL_STEP
        assert session.step is ConfigurationStep.REVIEW_AND_CONFIRM

    def test_failed_advance_leaves_selection_unchanged(self, session):
        before = session.selection.to_dict()
        session.advance()
        assert session.selection.to_dict() == before


class TestRetreat:

    def test_noop_at_first_step(self, session):
        result = session.retreat()
        assert result.ok
        assert session.step is ConfigurationStep.MEDIA_SELECTION

    def test_retreat_then_advance_round_trip(self, session):
        session.select_media(2)
        session.set_style("Popcorn")
        session.set_quantity(4)
        session.advance()
        session.advance()
        before_step = session.step
        before = session.selection.to_dict()

        session.retreat()
        session.advance()

        assert session.step is before_step
        assert session.selection.to_dict() == before


class TestMediaSelection:

    def test_sixth_media_rejected(self, session):
        for ref in range(5):
            assert session.select_media(ref).ok

        result = session.select_media(7)

        assert result.ok is False
        assert result.failure is ValidationFailure.MEDIA_CAP_REACHED
        assert session.selection.media_refs == [0, 1, 2, 3, 4]

    def test_toggle_off(self, session):
        session.select_media(3)
        session.select_media(3)
        assert session.selection.media_refs == []

    def test_unknown_media_rejected(self, session):
        result = session.select_media(10)
        assert result.failure is ValidationFailure.UNKNOWN_MEDIA
        assert session.selection.media_refs == []

    def test_media_editable_from_later_steps(self, session):
        session.select_media(1)
        session.advance()
        assert session.select_media(2).ok
        assert session.selection.media_refs == [1, 2]


class TestFieldSetters:

    def test_fields_settable_in_any_order(self, session):
        session.set_packaging("Pop-Top Tin")
        session.set_typography(TypographyChoice.LUXURY_THIN)
        session.set_theme("GOLDEN_HOUR")
        session.set_style("Hand-Trimmed")
        session.set_reseller_mark("logo-42.png")

        selection = session.selection
        assert selection.packaging is PackagingChoice.POP_TOP_TIN
        assert selection.typography is TypographyChoice.LUXURY_THIN
        assert selection.theme is ThemeChoice.GOLDEN_HOUR
        assert selection.style is StyleChoice.HAND_TRIMMED
        assert selection.reseller_mark == "logo-42.png"

    def test_quantity_clamped(self, session):
        assert session.set_quantity(-3) == 1
        assert session.selection.quantity == 1

    def test_invalid_choice_leaves_field_untouched(self, session):
        session.set_style("Popcorn")
        with pytest.raises(InvalidChoiceError):
            session.set_style("Shredded")
        assert session.selection.style is StyleChoice.POPCORN

    def test_choice_can_be_cleared(self, session):
        session.set_packaging("Pop-Top Tin")
        session.set_packaging(None)
        assert session.selection.packaging is None


class TestPricePreview:

    def test_tracks_quantity(self, session):
        assert session.price_preview == 420
        session.set_quantity(3)
        assert session.price_preview == 1260
        session.set_quantity(0)
        assert session.price_preview == 420


class TestCommit:

    @pytest.mark.parametrize("advances", [0, 1, 2])
    def test_rejected_before_review(self, session, batch, advances):
        session.select_media(0)
        for _ in range(advances):
            session.advance()

        result = session.commit(batch)

        assert result.ok is False
        assert result.failure is ValidationFailure.COMMIT_NOT_ALLOWED
        assert batch.is_empty()
        assert session.is_closed is False

    def test_commit_at_review_adds_item(self, session, batch, product):
        _walk_to_review(session)
        session.set_quantity(2)

        result = session.commit(batch)

        assert result.ok is True
        assert len(batch) == 1
        item = result.item
        assert item.product is product
        assert item.assigned_id is not None
        assert item.selection.quantity == 2
        assert item.selection.media_refs == (0,)

    def test_session_is_terminal_after_commit(self, session, batch):
        _walk_to_review(session)
        session.commit(batch)

        assert session.is_closed
        with pytest.raises(SessionClosedError):
            session.advance()
        with pytest.raises(SessionClosedError):
            session.select_media(1)
        with pytest.raises(SessionClosedError):
            session.commit(batch)
        assert len(batch) == 1


class TestAbandon:

    def test_abandon_has_no_batch_side_effects(self, session, batch):
        _walk_to_review(session)
        session.abandon()

        assert session.is_closed
        assert batch.is_empty()
        with pytest.raises(SessionClosedError):
            session.set_quantity(3)
