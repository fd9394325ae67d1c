"""Composable OCR receipt parser components."""

from .classifier import filter_item_fragments, numeric_column_fragments
from .common import DEFAULT_PARSER_CONFIG, HEADER_KEYWORDS, PROXIMITY_THRESHOLD, ParserConfig
from .fields_parser import extract_item_fields
from .grouping import attach_numeric_columns, group_by_proximity

__all__ = [
    "DEFAULT_PARSER_CONFIG",
    "HEADER_KEYWORDS",
    "PROXIMITY_THRESHOLD",
    "ParserConfig",
    "attach_numeric_columns",
    "extract_item_fields",
    "filter_item_fragments",
    "group_by_proximity",
    "numeric_column_fragments",
]
