"""Data models for Flatwiki pages."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Engine defaults, the first layer of every page's data
ENGINE_DEFAULTS: dict[str, Any] = {
    "published": True,
    "routable": True,
    "visible": True,
    "searchable": True,
    "cacheable": True,
    "sortable": True,
    "headers": {},
    "metadata": {},
}


class PageStatus(str, Enum):
    """Composite publication status of a page."""

    PUBLISHED = "published"
    NOT_PUBLISHED = "not-published"
    NOT_ROUTABLE = "not-routable"


class PageData(BaseModel):
    """Page fields merged from defaults and front matter.

    Known fields are typed and validated; anything else a template
    scheme or front matter declares is kept in the model's extras under
    its original key. Keys are addressed by their front matter name,
    e.g. ``data.get("publish-date")``.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        validate_assignment=True,
        coerce_numbers_to_str=True,
    )

    title: str | None = None
    published: bool = True
    routable: bool = True
    visible: bool = True
    searchable: bool = True
    cacheable: bool = True
    sortable: bool = True
    headers: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    publish_date: datetime | date | str | None = Field(
        default=None, alias="publish-date"
    )
    unpublish_date: datetime | date | str | None = Field(
        default=None, alias="unpublish-date"
    )
    response_status: int | None = None

    @classmethod
    def merge(cls, *layers: Mapping[str, Any]) -> "PageData":
        """Merge layers in order, later layers overriding earlier ones.

        Raises:
            pydantic.ValidationError: If a known field has a bad value.
        """
        merged: dict[str, Any] = {}
        for layer in layers:
            merged.update(layer)
        return cls.model_validate(merged)

    @classmethod
    def _field_name(cls, key: str) -> str | None:
        for name, info in cls.model_fields.items():
            if key == name or key == info.alias:
                return name
        return None

    def has(self, key: str) -> bool:
        """Return whether the key was set by a layer or by ``set``."""
        name = self._field_name(key)
        if name is not None:
            return name in self.model_fields_set
        return key in (self.model_extra or {})

    def get(self, key: str, default: Any = None) -> Any:
        if not self.has(key):
            return default
        name = self._field_name(key)
        if name is not None:
            return getattr(self, name)
        return self.model_extra[key]

    def set(self, key: str, value: Any) -> None:
        name = self._field_name(key)
        if name is not None:
            setattr(self, name, value)
        else:
            self.model_extra[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Return the set fields keyed by their front matter names."""
        data: dict[str, Any] = {}
        for name, info in type(self).model_fields.items():
            if name in self.model_fields_set:
                data[info.alias or name] = getattr(self, name)
        data.update(self.model_extra or {})
        return data


@dataclass(frozen=True)
class DerivedState:
    """Publication flags computed from page data."""

    published: bool
    routable: bool
    visible: bool
    sortable: bool
    status: PageStatus
