"""
Per-class generator.

Builds the ClassModel of one schema and renders the struct header, the
handler declaration and the handler implementation from that same model.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .analyzer import ClassModel, build_class_model
from .backends import HandlerDeclarationBackend, HandlerImplementationBackend, StructBackend
from .config import GeneratorConfig
from .schema_cache import Schema, SchemaCache


@dataclass
class GeneratedClass:
    """Rendered artifacts of one class."""

    model: ClassModel
    struct_header: str
    handler_header: str
    handler_source: str
    struct_file_name: str
    handler_header_file_name: str
    handler_source_file_name: str

    # Schemas referenced by the materialized properties, to be generated next
    dependencies: list[Schema] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.model.name


class ClassGenerator:
    """Generates the three artifacts of a class. Does not touch the filesystem."""

    def __init__(self, cache: SchemaCache, config: GeneratorConfig, namespace: str):
        """
        Initialize the generator.

        Args:
            cache: Schema cache used for $ref resolution
            config: Generator configuration
            namespace: Target namespace of every generated class
        """
        self.cache = cache
        self.config = config
        self.namespace = namespace
        self.struct_backend = StructBackend(config)
        self.declaration_backend = HandlerDeclarationBackend(config)
        self.implementation_backend = HandlerImplementationBackend(config)

    def build_model(self, schema: Schema) -> ClassModel:
        return build_class_model(self.cache, self.config, schema, self.namespace)

    def generate(self, schema: Schema) -> GeneratedClass:
        """
        Generate one class.

        Args:
            schema: Schema of the class

        Returns:
            The rendered artifacts and the schemas the class depends on
        """
        model = self.build_model(schema)
        return GeneratedClass(
            model=model,
            struct_header=self.struct_backend.render(model),
            handler_header=self.declaration_backend.render(model),
            handler_source=self.implementation_backend.render(model),
            struct_file_name=self.struct_backend.file_name(model),
            handler_header_file_name=self.declaration_backend.file_name(model),
            handler_source_file_name=self.implementation_backend.file_name(model),
            dependencies=list(model.schemas),
        )
