"""
Selection data models.

A Selection holds the configuration values a reseller picks while stepping
through the configuration wizard:
media -> style & branding -> packaging & quantity -> review.

Ownership:
    - Selection is mutable and owned by exactly one ConfigurationSession
    - Use Selection.freeze() to create the immutable snapshot that goes
      into the batch
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple, Type, TypeVar

from core.exceptions import (
    InvalidChoiceError,
    MediaCapInvariantError,
    QuantityInvariantError,
)


MAX_MEDIA_REFS = 5
"""Hard limit on marketing media attached to one configured item."""


class StyleChoice(Enum):
    """Product presentation style."""

    LARGE_COLAS = "Large Colas"
    DENSE_NUGS = "Dense Nugs"
    SMALL_BUDS = "Small Buds"
    POPCORN = "Popcorn"
    HAND_TRIMMED = "Hand-Trimmed"


class ThemeChoice(Enum):
    """Background theme for the branded media."""

    MINIMALIST_WHITE = "Minimalist White"
    DARK_OBSIDIAN = "Dark Obsidian"
    GOLDEN_HOUR = "Golden Hour"
    NEON_EMBER = "Neon Ember"
    NATURAL_WOOD = "Natural Wood"


class TypographyChoice(Enum):
    """Label typography."""

    MODERN_SANS = "Modern Sans"
    ELEGANT_SERIF = "Elegant Serif"
    STREET_SCRIPT = "Street Script"
    BOLD_INDUSTRIAL = "Bold Industrial"
    LUXURY_THIN = "Luxury Thin"


class PackagingChoice(Enum):
    """Packaging format."""

    MYLAR_HOLOGRAPHIC = "Mylar Bag (Holographic)"
    MYLAR_MATTE_BLACK = "Mylar Bag (Matte Black)"
    GLASS_JAR_BAMBOO = "Glass Jar (Bamboo Lid)"
    POP_TOP_TIN = "Pop-Top Tin"
    VACUUM_SEALED_STEALTH = "Vacuum Sealed Stealth"


E = TypeVar("E", bound=Enum)


def parse_choice(enum_cls: Type[E], raw: Any, field_name: str = "") -> Optional[E]:
    """
    Resolve a raw value into a member of a closed enumeration.

    Accepts an existing member, the member name ('POP_TOP_TIN') or the
    display value ('Pop-Top Tin'). None and empty strings mean "unset".

    Raises:
        InvalidChoiceError: If the value is not part of the enumeration
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, enum_cls):
        return raw

    text = str(raw).strip()
    for member in enum_cls:
        if text == member.value or text.upper() == member.name:
            return member

    raise InvalidChoiceError(
        field_name or enum_cls.__name__,
        raw,
        allowed=[m.value for m in enum_cls],
    )


def _enum_value(choice: Optional[Enum]) -> Optional[str]:
    return choice.value if choice is not None else None


@dataclass
class Selection:
    """
    In-progress configuration values for one product.

    Every field can be set independently and in any order; the wizard
    only groups them visually by step.
    """

    media_refs: List[int] = field(default_factory=list)
    """Chosen media library slots, insertion ordered, at most MAX_MEDIA_REFS."""

    style: Optional[StyleChoice] = None
    theme: Optional[ThemeChoice] = None
    typography: Optional[TypographyChoice] = None
    packaging: Optional[PackagingChoice] = None

    quantity: int = 1
    """Number of units, always >= 1."""

    reseller_mark: Optional[str] = None
    """Opaque reference to an uploaded reseller identity asset."""

    def toggle_media(self, ref: int) -> bool:
        """
        Add or remove a media reference.

        Returns:
            False when adding was rejected because the cap is reached,
            True otherwise (state changed)
        """
        if ref in self.media_refs:
            self.media_refs.remove(ref)
            return True
        if len(self.media_refs) >= MAX_MEDIA_REFS:
            return False
        self.media_refs.append(ref)
        return True

    @property
    def media_cap_reached(self) -> bool:
        return len(self.media_refs) >= MAX_MEDIA_REFS

    def set_quantity(self, quantity: int) -> int:
        """Set quantity, clamping anything below 1 to 1. Returns the stored value."""
        self.quantity = max(1, int(quantity))
        return self.quantity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "media_refs": list(self.media_refs),
            "style": _enum_value(self.style),
            "theme": _enum_value(self.theme),
            "typography": _enum_value(self.typography),
            "packaging": _enum_value(self.packaging),
            "quantity": self.quantity,
            "reseller_mark": self.reseller_mark,
        }

    def freeze(self) -> "FrozenSelection":
        """
        Create an immutable snapshot of this selection.

        Use this when committing to the batch; later edits to the session's
        Selection can never leak into a configured item.
        """
        return FrozenSelection(
            media_refs=tuple(self.media_refs),
            style=self.style,
            theme=self.theme,
            typography=self.typography,
            packaging=self.packaging,
            quantity=self.quantity,
            reseller_mark=self.reseller_mark,
        )


@dataclass(frozen=True)
class FrozenSelection:
    """
    Immutable snapshot of a Selection.

    This is a FROZEN dataclass - all attributes are read-only after creation.
    Construction re-checks the invariants; a violation is a defect.
    """

    media_refs: Tuple[int, ...] = ()
    style: Optional[StyleChoice] = None
    theme: Optional[ThemeChoice] = None
    typography: Optional[TypographyChoice] = None
    packaging: Optional[PackagingChoice] = None
    quantity: int = 1
    reseller_mark: Optional[str] = None

    def __post_init__(self):
        if self.quantity < 1:
            raise QuantityInvariantError(self.quantity)
        if len(self.media_refs) > MAX_MEDIA_REFS:
            raise MediaCapInvariantError(len(self.media_refs), MAX_MEDIA_REFS)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "media_refs": list(self.media_refs),
            "style": _enum_value(self.style),
            "theme": _enum_value(self.theme),
            "typography": _enum_value(self.typography),
            "packaging": _enum_value(self.packaging),
            "quantity": self.quantity,
            "reseller_mark": self.reseller_mark,
        }
