"""View-tree AST nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class StringValue:
    value: str


@dataclass
class BooleanValue:
    value: bool = True


@dataclass
class ExpressionValue:
    """Raw expression text re-serialized from the tokens between braces."""

    source: str


AttributeValue = Union[StringValue, BooleanValue, ExpressionValue]


@dataclass
class Attribute:
    name: str
    value: AttributeValue

    @property
    def is_event(self) -> bool:
        return isinstance(self.value, ExpressionValue) and self.name.startswith("on:")


@dataclass
class Text:
    text: str


@dataclass
class Interpolation:
    expression: str


@dataclass
class Slot:
    name: str = "content"


@dataclass
class Tag:
    name: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Element"] = field(default_factory=list)

    def attribute(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


@dataclass
class ComponentRef:
    """Reference to a component by name, resolved at generation time."""

    name: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Element"] = field(default_factory=list)


Element = Union[Text, Tag, Slot, ComponentRef, Interpolation]


__all__ = [
    "StringValue",
    "BooleanValue",
    "ExpressionValue",
    "AttributeValue",
    "Attribute",
    "Text",
    "Interpolation",
    "Slot",
    "Tag",
    "ComponentRef",
    "Element",
]
