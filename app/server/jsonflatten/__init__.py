from .constants import (
    DEFAULT_STYLE,
    DOT_STYLE,
    NO_FLATTENING_DEPTH,
    PATH_STYLE,
    RAILS_STYLE,
    UNDERSCORE_STYLE,
    UNLIMITED_DEPTH,
    SeparatorStyle,
)
from .errors import FlattenError, NotValidInputError, NotValidJsonInputError
from .file_processor import (
    clean_column_name,
    convert_jsonl_to_dataframe,
    detect_all_jsonl_fields,
    flatten_jsonl,
    flatten_string,
    flatten_string_preserving_sequences,
    parse_jsonl_records,
    records_to_dataframe,
)
from .flattener import compose_key, flatten, flatten_into, flatten_preserving_sequences

__all__ = [
    "DEFAULT_STYLE",
    "DOT_STYLE",
    "NO_FLATTENING_DEPTH",
    "PATH_STYLE",
    "RAILS_STYLE",
    "UNDERSCORE_STYLE",
    "UNLIMITED_DEPTH",
    "FlattenError",
    "NotValidInputError",
    "NotValidJsonInputError",
    "SeparatorStyle",
    "clean_column_name",
    "compose_key",
    "convert_jsonl_to_dataframe",
    "detect_all_jsonl_fields",
    "flatten",
    "flatten_into",
    "flatten_jsonl",
    "flatten_preserving_sequences",
    "flatten_string",
    "flatten_string_preserving_sequences",
    "parse_jsonl_records",
    "records_to_dataframe",
]
