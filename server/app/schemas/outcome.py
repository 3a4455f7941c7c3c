"""Results returned by controller operations.

A controller never touches HTTP objects. It answers with either a page to
render (view name plus model) or a redirect, optionally carrying a one-time
flash notification for the next rendered page.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from .product import FieldError

FlashKind = Literal["message", "error"]


@dataclass(frozen=True)
class Flash:
    """One-time notification displayed on the page after a redirect."""

    kind: FlashKind
    text: str

    @classmethod
    def message(cls, text: str) -> "Flash":
        return cls(kind="message", text=text)

    @classmethod
    def error(cls, text: str) -> "Flash":
        return cls(kind="error", text=text)


@dataclass(frozen=True)
class Render:
    """Render a view with its model, and any validation errors."""

    view: str
    model: dict[str, Any] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


@dataclass(frozen=True)
class Redirect:
    """Redirect to another page, optionally with a flash notification."""

    location: str
    flash: Flash | None = None


Outcome = Union[Render, Redirect]
