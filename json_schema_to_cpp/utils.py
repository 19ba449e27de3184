"""
Utility functions for JSON Schema to C++ generator.
"""

import re

# Splits text into words at camelCase and acronym boundaries
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")

# Splits "Namespace::Name" into its two parts; the namespace group is optional
_QUALIFIED_TYPE_NAME = re.compile(r"(?:(?P<namespace>.+)::)?(?P<name>.+)")

# Types living in the utility namespace have their handlers in the reader namespace
UTILITY_NAMESPACE = "CesiumUtility"
READER_NAMESPACE = "CesiumJsonReader"


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "alphaMode" -> "AlphaMode"
        "first 3 rows" -> "First3Rows"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def title_to_identifier(title: str) -> str:
    """Turn a schema title into a C++ identifier, keeping the casing of each word.

    Examples:
        "Node" -> "Node"
        "texture info" -> "TextureInfo"
        "glTF asset" -> "GlTFAsset"
        "KHR_materials_unlit glTF extension" -> "KHRMaterialsUnlitGlTFExtension"
    """
    words = re.split(r"[^0-9A-Za-z]+", title)
    return "".join(word[0].upper() + word[1:] for word in words if word)


def constant_name(value: object) -> str:
    """Name of the C++ constant that holds an enum value."""
    name = re.sub(r"[^0-9A-Za-z]+", "_", str(value)).strip("_").upper()
    if not name:
        return "EMPTY"
    if name[0].isdigit():
        return f"VALUE_{name}"
    return name


def split_qualified_name(name: str) -> tuple[str | None, str]:
    """Split ``A::B`` into ``("A", "B")``; unqualified names give ``(None, name)``."""
    match = _QUALIFIED_TYPE_NAME.fullmatch(name)
    if match is None:
        return None, name
    return match.group("namespace"), match.group("name")


def remove_namespace(name: str) -> str:
    return split_qualified_name(name)[1]


def get_include_from_name(name: str) -> str:
    """Include directive target for the struct header of a type."""
    namespace, short_name = split_qualified_name(name)
    if namespace:
        return f"<{namespace}/{short_name}.h>"
    return f'"{short_name}.h"'


def _reader_namespace(namespace: str) -> str:
    return READER_NAMESPACE if namespace == UTILITY_NAMESPACE else namespace


def get_reader_include_from_name(name: str) -> str:
    """Include directive target for the handler header of a type."""
    namespace, short_name = split_qualified_name(name)
    if namespace:
        return f"<{_reader_namespace(namespace)}/{short_name}JsonHandler.h>"
    return f'"{short_name}JsonHandler.h"'


def get_reader_name(name: str) -> str:
    """Class name of the handler that parses ``name``."""
    namespace, short_name = split_qualified_name(name)
    if namespace:
        return f"{_reader_namespace(namespace)}::{short_name}JsonHandler"
    return f"{short_name}JsonHandler"


def unique(items):
    """Deduplicate while preserving first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
