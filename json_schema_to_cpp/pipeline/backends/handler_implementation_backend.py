"""
Handler implementation backend.

Renders the body of a class's JSON handler: constructor, ``reset``, the key
dispatch and, for extensions, the registration ``reset``.
"""

from __future__ import annotations

from typing import Any

from ...utils import remove_namespace
from ..analyzer.ir_nodes import ClassModel
from .base import CodeBackend

# File all implementations are appended to when one handler file is requested
SHARED_HANDLER_FILE = "GeneratedJsonHandlers.cpp"


class HandlerImplementationBackend(CodeBackend):
    """Renders ``<Name>JsonHandler.cpp``."""

    TEMPLATE_NAME = "handler.cpp.jinja2"

    def file_name(self, model: ClassModel) -> str:
        return f"{model.reader_name}.cpp"

    def _prepare_context(self, model: ClassModel) -> dict[str, Any]:
        return {
            "headers": model.reader_headers_impl,
            "properties": model.materialized_properties,
            "base_short": remove_namespace(model.base),
            "reader_local_types_impl": model.reader_local_types_impl,
        }
