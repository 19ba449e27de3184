"""
Code generation backends.

One renderer per emitted artifact kind.
"""

from __future__ import annotations

from .base import CodeBackend
from .handler_declaration_backend import FORWARDED_EVENTS, HandlerDeclarationBackend
from .handler_implementation_backend import SHARED_HANDLER_FILE, HandlerImplementationBackend
from .register_extensions_backend import REGISTER_EXTENSIONS_FILE, ExtensionRegistration, RegisterExtensionsBackend
from .struct_backend import StructBackend

__all__ = [
    "CodeBackend",
    "StructBackend",
    "HandlerDeclarationBackend",
    "HandlerImplementationBackend",
    "RegisterExtensionsBackend",
    "ExtensionRegistration",
    "FORWARDED_EVENTS",
    "SHARED_HANDLER_FILE",
    "REGISTER_EXTENSIONS_FILE",
]
