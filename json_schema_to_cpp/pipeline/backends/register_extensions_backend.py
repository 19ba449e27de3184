"""
Extension registration backend.

Renders ``registerExtensions.cpp``, which registers every extension handler
with the owning classes it can be attached to.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import GeneratorConfig
from .base import create_environment

REGISTER_EXTENSIONS_FILE = "registerExtensions.cpp"


@dataclass(frozen=True)
class ExtensionRegistration:
    """An extension handler attached to an owning class."""

    owner: str
    extension: str
    extension_name: str


class RegisterExtensionsBackend:
    """Renders the extension registration function of a namespace."""

    TEMPLATE_NAME = "registerExtensions.cpp.jinja2"

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.template = create_environment().get_template(self.TEMPLATE_NAME)

    def render(self, namespace: str, registrations: list[ExtensionRegistration]) -> str:
        ordered = sorted(registrations, key=lambda r: (r.owner, r.extension_name))
        headers = sorted({f'"{r.extension}JsonHandler.h"' for r in ordered} | {f"<{namespace}/{r.owner}.h>" for r in ordered})
        return self.template.render(
            generation_comment=self.config.add_generation_comment,
            namespace=namespace,
            headers=headers,
            registrations=ordered,
        )
