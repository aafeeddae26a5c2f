"""Tagged properties: declaration, accessor cache and extraction."""

from .accessors import PropertyAccessor, declared_accessors
from .cache import PropertyCache
from .exceptions import AccessorDefinitionError, PropertyError, PropertyExtractionError
from .extractor import PropertyExtractor
from .tags import Tag, tag

__all__ = [
    "AccessorDefinitionError",
    "PropertyAccessor",
    "PropertyCache",
    "PropertyError",
    "PropertyExtractionError",
    "PropertyExtractor",
    "Tag",
    "declared_accessors",
    "tag",
]
