"""
Name resolution for generated classes.
"""

from __future__ import annotations

from ...utils import title_to_identifier
from ..config import GeneratorConfig
from ..schema_cache import Schema


def get_name_from_title(config: GeneratorConfig, title: str) -> str:
    """Class name for a schema title: the configured override, else the normalized title."""
    class_config = config.class_config(title)
    if class_config.override_name:
        return class_config.override_name
    return title_to_identifier(title)


def get_name_from_schema(config: GeneratorConfig, schema: Schema) -> str:
    return get_name_from_title(config, schema.title)
