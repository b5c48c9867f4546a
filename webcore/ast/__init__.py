"""AST node definitions for WebCore documents."""

from .document import (
    App,
    Component,
    Document,
    Layout,
    Page,
    Prop,
    StateVar,
    StyleProperty,
    StyleRule,
    merge_documents,
)
from .elements import (
    Attribute,
    AttributeValue,
    BooleanValue,
    ComponentRef,
    Element,
    ExpressionValue,
    Interpolation,
    Slot,
    StringValue,
    Tag,
    Text,
)

__all__ = [
    "App",
    "Component",
    "Document",
    "Layout",
    "Page",
    "Prop",
    "StateVar",
    "StyleProperty",
    "StyleRule",
    "merge_documents",
    "Attribute",
    "AttributeValue",
    "BooleanValue",
    "ComponentRef",
    "Element",
    "ExpressionValue",
    "Interpolation",
    "Slot",
    "StringValue",
    "Tag",
    "Text",
]
