"""
Analyzer module.

Contains name resolution, property resolution and ClassModel building.
"""

from __future__ import annotations

from .class_model_builder import build_class_model
from .ir_nodes import (
    ClassModel,
    DispatchEntry,
    Property,
    TypeKind,
    TypeRef,
)
from .name_resolver import get_name_from_schema, get_name_from_title
from .property_resolver import resolve_property

__all__ = [
    "ClassModel",
    "DispatchEntry",
    "Property",
    "TypeKind",
    "TypeRef",
    "build_class_model",
    "get_name_from_schema",
    "get_name_from_title",
    "resolve_property",
]
