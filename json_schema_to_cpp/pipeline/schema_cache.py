"""
Schema loading and $ref resolution.

Schemas are loaded from JSON files and cached by URI, so loading the same
reference twice gives back the same ``Schema`` object. Relative references are
resolved against the schema currently being generated, which is tracked by a
context stack that each generation call pushes on entry and pops on exit.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import SchemaError, SchemaLoadError

logger = logging.getLogger(__name__)


def split_uri(uri: str) -> tuple[str, str]:
    """Split ``path#/pointer`` into ``("path", "/pointer")``."""
    path, _, fragment = uri.partition("#")
    return path, fragment


def child_uri(uri: str, *tokens: str) -> str:
    """URI of a sub-schema, e.g. ``child_uri("a.json", "properties", "x")`` -> ``a.json#/properties/x``."""
    path, fragment = split_uri(uri)
    escaped = [t.replace("~", "~0").replace("/", "~1") for t in tokens]
    return f"{path}#{fragment}/{'/'.join(escaped)}"


@dataclass(frozen=True)
class Schema:
    """One class-shaped JSON schema.

    Identity is the URI: two ``Schema`` objects with the same URI are equal and
    hash the same, whatever their content.
    """

    uri: str
    title: str = field(default="", compare=False)
    description: str | None = field(default=None, compare=False)
    properties: dict[str, Any] = field(default_factory=dict, compare=False)
    required: frozenset[str] = field(default_factory=frozenset, compare=False)
    all_of: list[Any] = field(default_factory=list, compare=False)
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @staticmethod
    def from_dict(raw: dict[str, Any], uri: str, default_title: str = "") -> Schema:
        return Schema(
            uri=uri,
            title=raw.get("title") or default_title,
            description=raw.get("description"),
            properties=dict(raw.get("properties") or {}),
            required=frozenset(raw.get("required") or ()),
            all_of=list(raw.get("allOf") or ()),
            raw=raw,
        )

    @property
    def base_ref(self) -> str | None:
        """The ``$ref`` of the single parent schema, if this schema inherits."""
        if self.all_of and isinstance(self.all_of[0], dict):
            return self.all_of[0].get("$ref")
        return None

    @property
    def path(self) -> Path:
        return Path(split_uri(self.uri)[0])


def _default_title(path: Path, fragment: str) -> str:
    if fragment:
        return fragment.rstrip("/").split("/")[-1]
    return path.name.split(".")[0]


def _resolve_pointer(document: Any, pointer: str, ref: str) -> Any:
    node = document
    for token in pointer.split("/")[1:]:
        token = token.replace("~1", "/").replace("~0", "~")
        if isinstance(node, dict) and token in node:
            node = node[token]
        elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
            node = node[int(token)]
        else:
            raise SchemaLoadError(ref, f"JSON pointer '{pointer}' does not resolve")
    return node


class SchemaCache:
    """Loads and caches schemas, resolving references against a context stack."""

    def __init__(self, search_paths: Sequence[str | Path] = ()):
        """
        Initialize the cache.

        Args:
            search_paths: Directories tried, in order, for references that are
                not found next to the referencing schema
        """
        self.search_paths = [Path(p).resolve() for p in search_paths]
        self._documents: dict[Path, Any] = {}
        self._schemas: dict[str, Schema] = {}
        self._context: list[Schema] = []

    def push_context(self, schema: Schema) -> None:
        self._context.append(schema)

    def pop_context(self) -> Schema:
        if not self._context:
            raise SchemaError("pop_context() called with an empty context stack")
        return self._context.pop()

    @contextmanager
    def context(self, schema: Schema) -> Iterator[Schema]:
        """Make ``schema`` the resolution context for the duration of the block."""
        self.push_context(schema)
        try:
            yield schema
        finally:
            self.pop_context()

    @property
    def context_depth(self) -> int:
        return len(self._context)

    @property
    def current(self) -> Schema | None:
        return self._context[-1] if self._context else None

    def load_file(self, path: str | Path) -> Schema:
        """Load the schema stored at ``path``."""
        resolved = Path(path).resolve()
        return self._get_schema(resolved, "", str(path))

    def load(self, ref: str) -> Schema:
        """
        Load the schema a ``$ref`` points at.

        Args:
            ref: A relative file path, optionally followed by ``#/json/pointer``,
                or a bare ``#/json/pointer`` into the current context document

        Returns:
            The cached Schema for the reference

        Raises:
            SchemaLoadError: If the reference cannot be resolved
        """
        path_part, fragment = split_uri(ref)
        if not path_part:
            if self.current is None:
                raise SchemaLoadError(ref, "local reference used outside of a schema context")
            path = self.current.path
        else:
            path = self._find(path_part, ref)
        return self._get_schema(path, fragment, ref)

    def register(self, schema: Schema) -> Schema:
        """Add a schema that was not loaded from a file (e.g. an inline object)."""
        return self._schemas.setdefault(schema.uri, schema)

    def _find(self, relative: str, ref: str) -> Path:
        candidates = []
        if self.current is not None:
            candidates.append(self.current.path.parent / relative)
        candidates.extend(base / relative for base in self.search_paths)
        candidates.append(Path(relative))
        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()
        raise SchemaLoadError(ref, "file not found")

    def _get_schema(self, path: Path, fragment: str, ref: str) -> Schema:
        uri = f"{path}#{fragment}" if fragment else str(path)
        schema = self._schemas.get(uri)
        if schema is not None:
            return schema

        document = self._load_document(path, ref)
        node = _resolve_pointer(document, fragment, ref) if fragment else document
        if not isinstance(node, dict):
            raise SchemaLoadError(ref, "schema is not a JSON object")

        logger.debug("Loaded schema %s", uri)
        schema = Schema.from_dict(node, uri, _default_title(path, fragment))
        self._schemas[uri] = schema
        return schema

    def _load_document(self, path: Path, ref: str) -> Any:
        if path not in self._documents:
            try:
                with open(path, encoding="utf-8") as f:
                    self._documents[path] = json.load(f)
            except OSError as e:
                raise SchemaLoadError(ref, str(e)) from e
            except json.JSONDecodeError as e:
                raise SchemaLoadError(ref, f"invalid JSON: {e}") from e
        return self._documents[path]
