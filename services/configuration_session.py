"""
Configuration session: the step state machine behind the configure wizard.

A session drives one reseller through a fixed sequence of steps for
exactly one product:

    MEDIA_SELECTION -> STYLE_AND_BRANDING -> PACKAGING_AND_QUANTITY -> REVIEW_AND_CONFIRM

Transitions:
    - advance(): step i -> i+1 only if the guard for step i passes
    - retreat(): step i -> i-1, no-op at the first step
    - commit(batch): only at REVIEW_AND_CONFIRM; hands the frozen selection
      to the batch and closes the session
    - abandon(): closes the session, no side effects

Field setters work at any step and in any order.

Guard failures and the media cap are reported as StepResult values and
never mutate state. Operations on a closed session raise SessionClosedError.

Usage:
    session = ConfigurationSession(product)
    session.select_media(3)
    result = session.advance()
    if not result.ok:
        # result.failure tells the caller what to re-prompt
        pass
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from core.exceptions import SessionClosedError
from logging_config import get_logger
from models.configured_item import ConfiguredItem
from models.product import Product
from models.selection import (
    MAX_MEDIA_REFS,
    PackagingChoice,
    Selection,
    StyleChoice,
    ThemeChoice,
    TypographyChoice,
    parse_choice,
)
from modules.catalog import MEDIA_LIBRARY_SIZE

if TYPE_CHECKING:
    from services.batch import Batch


logger = get_logger(__name__)


class ConfigurationStep(Enum):
    """Wizard steps in order."""

    MEDIA_SELECTION = 0
    STYLE_AND_BRANDING = 1
    PACKAGING_AND_QUANTITY = 2
    REVIEW_AND_CONFIRM = 3

    @property
    def is_terminal(self) -> bool:
        return self is ConfigurationStep.REVIEW_AND_CONFIRM

    @property
    def next_step(self) -> Optional["ConfigurationStep"]:
        if self.is_terminal:
            return None
        return ConfigurationStep(self.value + 1)

    @property
    def previous_step(self) -> Optional["ConfigurationStep"]:
        if self.value == 0:
            return None
        return ConfigurationStep(self.value - 1)

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


class ValidationFailure(Enum):
    """Reasons a session operation was refused."""

    MEDIA_REQUIRED = "Select at least one media item to continue"
    MEDIA_CAP_REACHED = f"A maximum of {MAX_MEDIA_REFS} media items can be selected"
    UNKNOWN_MEDIA = "Media item is not part of the media library"
    TERMINAL_STEP = "Review is the last step; confirm to add the item to the batch"
    COMMIT_NOT_ALLOWED = "Items can only be added to the batch from the review step"


def _require_media(selection: Selection) -> Optional[ValidationFailure]:
    if not selection.media_refs:
        return ValidationFailure.MEDIA_REQUIRED
    return None


def _always(selection: Selection) -> Optional[ValidationFailure]:
    return None


# Guard evaluated when leaving a step via advance().
# REVIEW_AND_CONFIRM has no entry: it is left only through commit().
STEP_GUARDS: Dict[ConfigurationStep, Callable[[Selection], Optional[ValidationFailure]]] = {
    ConfigurationStep.MEDIA_SELECTION: _require_media,
    ConfigurationStep.STYLE_AND_BRANDING: _always,
    ConfigurationStep.PACKAGING_AND_QUANTITY: _always,
}


@dataclass(frozen=True)
class StepResult:
    """Outcome of a session operation."""

    ok: bool
    step: ConfigurationStep
    failure: Optional[ValidationFailure] = None
    item: Optional[ConfiguredItem] = None
    """The committed item (commit only)."""

    @classmethod
    def success(cls, step: ConfigurationStep, item: Optional[ConfiguredItem] = None) -> "StepResult":
        return cls(ok=True, step=step, item=item)

    @classmethod
    def rejected(cls, step: ConfigurationStep, failure: ValidationFailure) -> "StepResult":
        return cls(ok=False, step=step, failure=failure)

    @property
    def message(self) -> Optional[str]:
        return self.failure.value if self.failure else None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "ok": self.ok,
            "step": self.step.name,
            "step_index": self.step.value,
        }
        if self.failure:
            data["failure"] = self.failure.name
            data["message"] = self.failure.value
        if self.item is not None:
            data["item"] = self.item.to_dict()
        return data


class ConfigurationSession:
    """
    In-progress configuration of one product.

    Attributes:
        product: The product being configured (read-only)
        selection: Values chosen so far
        step: Current wizard step
    """

    def __init__(self, product: Product, media_library_size: int = MEDIA_LIBRARY_SIZE):
        self.product = product
        self.selection = Selection()
        self.step = ConfigurationStep.MEDIA_SELECTION
        self.media_library_size = media_library_size
        self._closed = False
        logger.debug(f"Session opened for product {product.product_id}")

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise SessionClosedError(self.product.product_id, operation)

    # ------------------------------------------------------------------
    # Field edits
    # ------------------------------------------------------------------

    def select_media(self, ref: int) -> StepResult:
        """
        Toggle a media library slot.

        Adding a sixth item is rejected with MEDIA_CAP_REACHED and leaves
        the selection as it was.
        """
        self._ensure_open("select_media")
        if not 0 <= ref < self.media_library_size:
            return StepResult.rejected(self.step, ValidationFailure.UNKNOWN_MEDIA)
        if not self.selection.toggle_media(ref):
            logger.debug(f"Media cap reached, rejected ref {ref}")
            return StepResult.rejected(self.step, ValidationFailure.MEDIA_CAP_REACHED)
        return StepResult.success(self.step)

    def set_style(self, value) -> Optional[StyleChoice]:
        self._ensure_open("set_style")
        self.selection.style = parse_choice(StyleChoice, value, "style")
        return self.selection.style

    def set_theme(self, value) -> Optional[ThemeChoice]:
        self._ensure_open("set_theme")
        self.selection.theme = parse_choice(ThemeChoice, value, "theme")
        return self.selection.theme

    def set_typography(self, value) -> Optional[TypographyChoice]:
        self._ensure_open("set_typography")
        self.selection.typography = parse_choice(TypographyChoice, value, "typography")
        return self.selection.typography

    def set_packaging(self, value) -> Optional[PackagingChoice]:
        self._ensure_open("set_packaging")
        self.selection.packaging = parse_choice(PackagingChoice, value, "packaging")
        return self.selection.packaging

    def set_quantity(self, quantity: int) -> int:
        """Set quantity; values below 1 are clamped to 1."""
        self._ensure_open("set_quantity")
        return self.selection.set_quantity(quantity)

    def set_reseller_mark(self, ref: Optional[str]) -> None:
        self._ensure_open("set_reseller_mark")
        self.selection.reseller_mark = ref or None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def advance(self) -> StepResult:
        """Move to the next step if the current step's guard passes."""
        self._ensure_open("advance")
        if self.step.is_terminal:
            return StepResult.rejected(self.step, ValidationFailure.TERMINAL_STEP)

        failure = STEP_GUARDS[self.step](self.selection)
        if failure is not None:
            logger.debug(f"Guard failed at {self.step.name}: {failure.name}")
            return StepResult.rejected(self.step, failure)

        self.step = self.step.next_step
        logger.debug(f"Advanced to {self.step.name}")
        return StepResult.success(self.step)

    def retreat(self) -> StepResult:
        """Move to the previous step. No-op at the first step."""
        self._ensure_open("retreat")
        previous = self.step.previous_step
        if previous is not None:
            self.step = previous
        return StepResult.success(self.step)

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------

    def commit(self, batch: "Batch") -> StepResult:
        """
        Add the configured product to the batch and close the session.

        Only legal at REVIEW_AND_CONFIRM; elsewhere the batch is untouched
        and COMMIT_NOT_ALLOWED is returned.
        """
        self._ensure_open("commit")
        if not self.step.is_terminal:
            return StepResult.rejected(self.step, ValidationFailure.COMMIT_NOT_ALLOWED)

        item = batch.commit_selection(self.product, self.selection.freeze())
        self._closed = True
        logger.info(
            f"Committed product {self.product.product_id} as item {item.assigned_id} "
            f"(qty {item.quantity}, {len(item.selection.media_refs)} media)"
        )
        return StepResult.success(self.step, item=item)

    def abandon(self) -> None:
        """Discard the session and its selection."""
        self._ensure_open("abandon")
        self._closed = True
        logger.debug(f"Session abandoned for product {self.product.product_id}")

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def price_preview(self) -> int:
        """Unit price times the current quantity."""
        return self.product.price * self.selection.quantity

    @property
    def can_advance(self) -> bool:
        if self._closed or self.step.is_terminal:
            return False
        return STEP_GUARDS[self.step](self.selection) is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "product": self.product.to_dict(),
            "step": self.step.name,
            "step_index": self.step.value,
            "step_label": self.step.label,
            "total_steps": len(ConfigurationStep),
            "selection": self.selection.to_dict(),
            "price_preview": self.price_preview,
            "can_advance": self.can_advance,
            "media_cap_reached": self.selection.media_cap_reached,
            "closed": self._closed,
        }
