"""
Generation driver.

Generates every class reachable from the root schemas: each generated class
returns the schemas its properties depend on, which are queued along with
its base schema until the worklist is empty. Classes are deduplicated by name. Everything is rendered in memory
first and only written once the whole run succeeded, so a failure never
leaves a half-generated struct/handler pair on disk.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType

from .analyzer import get_name_from_schema, get_name_from_title
from .backends import REGISTER_EXTENSIONS_FILE, SHARED_HANDLER_FILE, ExtensionRegistration, RegisterExtensionsBackend
from .config import ClassConfig, GeneratorConfig
from .generator import ClassGenerator, GeneratedClass
from .schema_cache import Schema, SchemaCache
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Everything rendered by one generation run."""

    namespace: str
    classes: list[GeneratedClass] = field(default_factory=list)
    registrations: list[ExtensionRegistration] = field(default_factory=list)
    register_extensions: str | None = None

    def get(self, name: str) -> GeneratedClass:
        for generated in self.classes:
            if generated.name == name:
                return generated
        raise KeyError(name)

    @property
    def models(self):
        return [generated.model for generated in self.classes]


class Driver:
    """Runs the cross-schema worklist and writes the results."""

    def __init__(
        self,
        config: GeneratorConfig,
        namespace: str,
        search_paths: Iterable[str | Path] = (),
        base_dir: str | Path | None = None,
    ):
        """
        Initialize the driver.

        Args:
            config: Generator configuration
            namespace: Target namespace
            search_paths: Extra directories used to resolve schema references
            base_dir: Directory the extension schema paths of the config are relative to
        """
        self.cache = SchemaCache(search_paths)
        self.namespace = namespace
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.config = config

    def generate(self, schema_paths: Iterable[str | Path]) -> GenerationResult:
        """
        Generate every class reachable from ``schema_paths``.

        Args:
            schema_paths: Root schema files

        Returns:
            The rendered classes, in generation order

        Raises:
            SchemaLoadError: If any schema cannot be loaded
        """
        roots = [self.cache.load_file(path) for path in schema_paths]
        extension_schemas, registrations = self._load_extensions()

        config = self._with_extension_names(extension_schemas)
        generator = ClassGenerator(self.cache, config, self.namespace)
        result = GenerationResult(namespace=self.namespace, registrations=registrations)

        queue: deque[Schema] = deque(roots + [schema for schema, _ in extension_schemas])
        seen: set[str] = set()
        while queue:
            schema = queue.popleft()
            name = get_name_from_schema(config, schema)
            if name in seen:
                continue
            seen.add(name)

            generated = generator.generate(schema)
            result.classes.append(generated)
            if generated.model.base_schema is not None:
                queue.append(generated.model.base_schema)
            queue.extend(generated.dependencies)

        if registrations:
            result.register_extensions = RegisterExtensionsBackend(config).render(self.namespace, registrations)

        logger.info("Generated %d classes", len(result.classes))
        return result

    def _load_extensions(self) -> tuple[list[tuple[Schema, str]], list[ExtensionRegistration]]:
        schemas = []
        registrations = []
        for owner_title, entries in self.config.extensions.items():
            owner = get_name_from_title(self.config, owner_title)
            for entry in entries:
                schema = self.cache.load_file(self.base_dir / entry.schema)
                schemas.append((schema, entry.extension_name))
                registrations.append(ExtensionRegistration(owner, get_name_from_schema(self.config, schema), entry.extension_name))
        return schemas, registrations

    def _with_extension_names(self, extension_schemas: list[tuple[Schema, str]]) -> GeneratorConfig:
        """Config where every configured extension schema carries its extension name."""
        classes = dict(self.config.classes)
        for schema, extension_name in extension_schemas:
            current = classes.get(schema.title, ClassConfig())
            if current.extension_name is None:
                classes[schema.title] = replace(current, extension_name=extension_name)
        if classes == dict(self.config.classes):
            return self.config
        return replace(self.config, classes=MappingProxyType(classes))

    def write(
        self,
        result: GenerationResult,
        output_dir: str | Path,
        reader_output_dir: str | Path,
        one_handler_file: bool = False,
        writer: AtomicWriter | None = None,
    ) -> list[Path]:
        """
        Write a generation result.

        Args:
            result: The rendered classes
            output_dir: Root of the struct headers (written to ``include/<namespace>``)
            reader_output_dir: Root of the handlers (written to ``generated``)
            one_handler_file: Append every handler implementation to one shared file
            writer: Writer to use; a new AtomicWriter by default

        Returns:
            Paths of the written files
        """
        writer = writer or AtomicWriter()
        struct_dir = Path(output_dir) / "include" / result.namespace
        reader_dir = Path(reader_output_dir) / "generated"
        written: list[Path] = []

        # Every text is validated before the first file is touched
        for generated in result.classes:
            for content in (generated.struct_header, generated.handler_header, generated.handler_source):
                writer.validate(content)
        if result.register_extensions is not None:
            writer.validate(result.register_extensions)

        shared_path = reader_dir / SHARED_HANDLER_FILE
        if one_handler_file:
            writer.truncate(shared_path)
            written.append(shared_path)

        for generated in result.classes:
            for path, content in (
                (struct_dir / generated.struct_file_name, generated.struct_header),
                (reader_dir / generated.handler_header_file_name, generated.handler_header),
            ):
                writer.write(path, content)
                written.append(path)

            if one_handler_file:
                writer.append(shared_path, generated.handler_source)
            else:
                path = reader_dir / generated.handler_source_file_name
                writer.write(path, generated.handler_source)
                written.append(path)

        if result.register_extensions is not None:
            path = reader_dir / REGISTER_EXTENSIONS_FILE
            writer.write(path, result.register_extensions)
            written.append(path)

        logger.info("Wrote %d files", len(written))
        return written


def generate_all(
    schema_paths: Iterable[str | Path],
    config: GeneratorConfig,
    namespace: str,
    output_dir: str | Path,
    reader_output_dir: str | Path,
    one_handler_file: bool = False,
    search_paths: Iterable[str | Path] = (),
    base_dir: str | Path | None = None,
    writer: AtomicWriter | None = None,
) -> GenerationResult:
    """Generate every class reachable from ``schema_paths`` and write the files."""
    driver = Driver(config, namespace, search_paths, base_dir)
    result = driver.generate(schema_paths)
    driver.write(result, output_dir, reader_output_dir, one_handler_file, writer)
    return result
