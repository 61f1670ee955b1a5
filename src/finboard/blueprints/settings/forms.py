"""Settings form validation helpers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ...constants import CURRENCIES, EXPENSE, KINDS

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _raw(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value).strip()


@dataclass(slots=True)
class ProfileForm:
    """Editable profile fields; the email is displayed but never submitted."""

    full_name: str = ""
    currency: str = "BRL"
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ProfileForm:
        return cls(full_name=_raw(data, "full_name"), currency=_raw(data, "currency").upper())

    def validate(self) -> bool:
        self.errors.clear()
        if len(self.full_name) > 128:
            self.errors.setdefault("full_name", []).append("Name must be 128 characters or fewer.")
        if self.currency not in CURRENCIES:
            self.errors.setdefault("currency", []).append("Choose BRL, USD or EUR.")
        return not self.errors

    def changes(self) -> dict[str, str]:
        return {"full_name": self.full_name, "currency": self.currency}


@dataclass(slots=True)
class CategoryForm:
    """Represents category input prior to validation."""

    name: str = ""
    kind: str = EXPENSE
    color: str = "#3B82F6"
    icon: Optional[str] = None
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CategoryForm:
        return cls(
            name=_raw(data, "name"),
            kind=_raw(data, "kind") or EXPENSE,
            color=_raw(data, "color") or "#3B82F6",
            icon=_raw(data, "icon") or None,
        )

    @classmethod
    def from_category(cls, category: Any) -> CategoryForm:
        return cls(name=category.name, kind=category.kind, color=category.color, icon=category.icon)

    def validate(self) -> bool:
        self.errors.clear()
        if not self.name:
            self._add_error("name", "Name is required.")
        elif len(self.name) > 64:
            self._add_error("name", "Name must be 64 characters or fewer.")
        if self.kind not in KINDS:
            self._add_error("kind", "Type must be income or expense.")
        if not HEX_COLOR.match(self.color):
            self._add_error("color", "Color must look like #RRGGBB.")
        if self.icon and len(self.icon) > 32:
            self._add_error("icon", "Icon must be 32 characters or fewer.")
        return not self.errors

    def changes(self) -> dict[str, Any]:
        return {"name": self.name, "kind": self.kind, "color": self.color, "icon": self.icon}

    def _add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)
