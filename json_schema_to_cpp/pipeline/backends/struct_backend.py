"""
Struct backend.

Renders the plain data-structure header of a class.
"""

from __future__ import annotations

from typing import Any

from ..analyzer.ir_nodes import ClassModel, Property
from .base import CodeBackend


class StructBackend(CodeBackend):
    """Renders ``<Name>.h`` (or ``<Name>Spec.h`` for spec shapes)."""

    TEMPLATE_NAME = "struct.h.jinja2"

    def file_name(self, model: ClassModel) -> str:
        return f"{model.struct_name}.h"

    def _prepare_context(self, model: ClassModel) -> dict[str, Any]:
        return {
            "headers": model.headers,
            "api": f"{model.namespace.upper()}_API",
            "brief": model.description or model.title,
            "struct_name": model.struct_name,
            "sealed": not model.to_be_inherited and not model.is_base_class,
            "to_be_inherited": model.to_be_inherited,
            "local_types": model.local_types,
            "properties": [self._prepare_property_context(p) for p in model.materialized_properties],
        }

    def _prepare_property_context(self, prop: Property) -> dict[str, Any]:
        if prop.default_value is not None:
            init = prop.default_value
        elif prop.needs_initialization:
            init = f"{prop.type}()"
        else:
            init = None
        return {
            "name": prop.name,
            "type": prop.type,
            "brief": prop.brief_doc or prop.name,
            "full_doc": prop.full_doc,
            "init": init,
        }
