"""
ClassModel builder.

Turns one schema into a ``ClassModel``: resolves the base class, resolves every
property and aggregates the deduplicated header, local type and dependency
sets that the three emitted artifacts share.
"""

from __future__ import annotations

import logging
from itertools import chain

from ...utils import get_include_from_name, get_reader_include_from_name, unique
from ..config import GeneratorConfig
from ..schema_cache import Schema, SchemaCache
from .ir_nodes import ClassModel, Property
from .name_resolver import get_name_from_schema
from .property_resolver import resolve_property

logger = logging.getLogger(__name__)


def _collect(properties: list[Property], attr: str) -> list:
    return unique(chain.from_iterable(getattr(p, attr) for p in properties))


def build_class_model(cache: SchemaCache, config: GeneratorConfig, schema: Schema, namespace: str) -> ClassModel:
    """
    Build the model of one class.

    Args:
        cache: Schema cache used to resolve the base schema and property references
        config: Generator configuration
        schema: Schema of the class
        namespace: Target namespace

    Returns:
        The resolved ClassModel

    Raises:
        SchemaLoadError: If the base schema or a referenced schema cannot be loaded
    """
    name = get_name_from_schema(config, schema)
    class_config = config.class_config(schema.title)

    logger.info("Generating %s", name)

    base = config.extensible_object_base
    base_class_name = None
    base_schema = None
    with cache.context(schema):
        if schema.base_ref:
            base_schema = cache.load(schema.base_ref)
            base = base_class_name = get_name_from_schema(config, base_schema)

        resolved = [resolve_property(cache, config, name, key, value, schema.required, namespace) for key, value in schema.properties.items()]
    properties = [p for p in resolved if p is not None]
    materialized = [p for p in properties if p.is_materialized]

    own_header = f'"{name}.h"'
    headers = unique([config.library_header, get_include_from_name(base), *_collect(properties, "headers")])
    headers = sorted(h for h in headers if h != own_header)

    own_reader_header = f'"{name}JsonHandler.h"'
    extension_headers = ["<CesiumJsonReader/IExtensionJsonHandler.h>"] if class_config.extension_name else []
    reader_headers = unique([get_reader_include_from_name(base), f"<{namespace}/{name}.h>", *extension_headers, *_collect(properties, "reader_headers")])
    reader_headers = sorted(h for h in reader_headers if h != own_reader_header)

    return ClassModel(
        name=name,
        namespace=namespace,
        title=schema.title,
        description=schema.description,
        base=base,
        base_class_name=base_class_name,
        base_schema=base_schema,
        to_be_inherited=class_config.to_be_inherited,
        is_base_class=class_config.is_base_class,
        extension_name=class_config.extension_name,
        properties=properties,
        local_types=_collect(materialized, "local_types"),
        reader_local_types=_collect(materialized, "reader_local_types"),
        reader_local_types_impl=_collect(materialized, "reader_local_types_impl"),
        headers=headers,
        reader_headers=reader_headers,
        reader_headers_impl=sorted(_collect(properties, "reader_headers_impl")),
        schemas=_collect(materialized, "schemas"),
    )
