"""
Node Schemas

Normalized page-element descriptors consumed by the checkers. A node list is
built once per analysis run (from a canvas selection or parsed head markup)
and is never mutated afterwards, so every model here is frozen.
"""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _HostModel(BaseModel):
    # Hosts send camelCase keys (ariaLabel, fontSize); snake_case works too
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class NodeStyle(_HostModel):
    """Shallow style hints. Unknown hint keys (e.g. ``focusRing``) are kept as extras."""
    font_size: Optional[float] = None
    color: Optional[str] = None
    background_color: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None

    def hint_keys(self) -> Tuple[str, ...]:
        keys = [
            type(self).model_fields[name].alias or name
            for name in type(self).model_fields
            if getattr(self, name) is not None
        ]
        keys.extend((self.model_extra or {}).keys())
        return tuple(keys)


class NodeMetadata(_HostModel):
    """Meta-tag-like key/values: ``<meta name=... content=... property=...>``."""
    name: Optional[str] = None
    content: Optional[str] = None
    property: Optional[str] = None
    html_tag: Optional[str] = None

    def get(self, key: str) -> Optional[str]:
        if key in type(self).model_fields:
            return getattr(self, key)
        return (self.model_extra or {}).get(key)


class Node(_HostModel):
    """
    One page element.

    ``type`` is advisory: checkers fall back to substrings of ``name`` and
    never treat ``type`` as authoritative.

    ``alt=None`` means the element has no alt attribute at all, while
    ``alt=""`` is an explicitly empty alt.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: Optional[str] = None
    name: str = ""
    type: Optional[str] = None
    text: Optional[str] = None
    alt: Optional[str] = None
    href: Optional[str] = None
    rel: Optional[str] = None
    role: Optional[str] = None
    aria_label: Optional[str] = None
    style: Optional[NodeStyle] = None
    metadata: Optional[NodeMetadata] = None
    children: Tuple["Node", ...] = ()

    @property
    def lower_name(self) -> str:
        return self.name.lower()

    @property
    def font_size(self) -> float:
        return (self.style.font_size if self.style else None) or 0

    @property
    def width(self) -> float:
        return (self.style.width if self.style else None) or 0

    @property
    def height(self) -> float:
        return (self.style.height if self.style else None) or 0

    def meta(self, key: str) -> Optional[str]:
        return self.metadata.get(key) if self.metadata else None


Node.model_rebuild()
