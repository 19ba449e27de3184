"""
Base class for code generation backends.

Each backend renders one artifact kind from a ``ClassModel`` through a Jinja2
template. Backends only read the model; all resolution happens beforehand in
the analyzer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ...utils import get_reader_name
from ..analyzer.ir_nodes import ClassModel
from ..config import GeneratorConfig

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates" / "cpp"


def _doc_continuation(text: str, width: int = 0) -> str:
    """Continue a multi-line documentation paragraph inside a ``/** */`` block."""
    return ("\n" + " " * width + " * ").join(text.split("\n"))


def create_environment() -> jinja2.Environment:
    """Jinja2 environment over the C++ templates."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )
    # Add custom filters
    env.filters["doc_continuation"] = _doc_continuation
    return env


class CodeBackend(ABC):
    """Abstract base class for the artifact renderers."""

    # Template file name under templates/cpp
    TEMPLATE_NAME: str = ""

    def __init__(self, config: GeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        self.jinja_env = create_environment()
        self.template = self.jinja_env.get_template(self.TEMPLATE_NAME)

    def render(self, model: ClassModel) -> str:
        """
        Render the artifact for ``model``.

        Args:
            model: The class to render

        Returns:
            Generated code as a string
        """
        ctx = self._prepare_common_context(model)
        ctx.update(self._prepare_context(model))
        return self.template.render(ctx)

    @abstractmethod
    def _prepare_context(self, model: ClassModel) -> dict[str, Any]:
        """
        Prepare the artifact-specific template variables.

        Args:
            model: The class to render

        Returns:
            Dictionary of template variables
        """

    @abstractmethod
    def file_name(self, model: ClassModel) -> str:
        """Name of the file the artifact is written to."""

    def _prepare_common_context(self, model: ClassModel) -> dict[str, Any]:
        return {
            "generation_comment": self.config.add_generation_comment,
            "name": model.name,
            "title": model.title,
            "namespace": model.namespace,
            "base": model.base,
            "base_reader": get_reader_name(model.base),
            "reader_name": model.reader_name,
            "extension_name": model.extension_name,
        }
