"""Form value processing helpers."""

from schemaforms.processing.normalization import normalize_field_value

__all__ = ["normalize_field_value"]
