import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Sequence, Set, Tuple, Union

import pandas as pd

from .constants import DEFAULT_STYLE, JSON_OBJECT_PATTERN, UNLIMITED_DEPTH, SeparatorStyle
from .errors import NotValidInputError, NotValidJsonInputError
from .flattener import flatten, flatten_preserving_sequences

logger = logging.getLogger(__name__)

TextContent = Union[str, bytes]


def _flattener_for(preserve_sequences: bool) -> Callable[..., Dict[str, Any]]:
    return flatten_preserving_sequences if preserve_sequences else flatten


def _decode(content: TextContent) -> str:
    if isinstance(content, bytes):
        return content.decode('utf-8')
    return content


def _flatten_string(
    nested_string: TextContent,
    prefix: str,
    style: SeparatorStyle,
    depth: int,
    preserve_sequences: bool,
) -> str:
    nested_string = _decode(nested_string)

    if not JSON_OBJECT_PATTERN.match(nested_string):
        raise NotValidJsonInputError()

    # Decoder errors propagate to the caller unchanged
    nested = json.loads(nested_string)

    flat_map = _flattener_for(preserve_sequences)(nested, prefix, style, depth)

    return json.dumps(flat_map, sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def flatten_string(
    nested_string: TextContent,
    prefix: str = "",
    style: SeparatorStyle = DEFAULT_STYLE,
    depth: int = UNLIMITED_DEPTH,
) -> str:
    """
    Flatten a JSON object document and return the flat mapping as JSON text.

    Args:
        nested_string: JSON text (or UTF-8 bytes) whose top-level value is an object
        prefix: Text prepended to every produced key
        style: The separator style for nested key segments
        depth: Number of nesting levels to collapse into the key (-1 for no limit)

    Returns:
        Compact JSON text of the flat mapping with sorted keys

    Raises:
        NotValidJsonInputError: If the text is empty or does not start with ``{``
        json.JSONDecodeError: If the text starts like an object but is malformed

    Examples:
        >>> flatten_string('{"a": {"b": "c"}, "n": 1}')
        '{"a.b":"c","n":1}'
    """
    return _flatten_string(nested_string, prefix, style, depth, False)


def flatten_string_preserving_sequences(
    nested_string: TextContent,
    prefix: str = "",
    style: SeparatorStyle = DEFAULT_STYLE,
    depth: int = UNLIMITED_DEPTH,
) -> str:
    """
    Flatten a JSON object document like :func:`flatten_string`, keeping arrays intact.
    """
    return _flatten_string(nested_string, prefix, style, depth, True)


def parse_jsonl_records(jsonl_content: TextContent) -> List[Dict[str, Any]]:
    """
    Parse every JSON object line of a JSON Lines document.

    Blank lines are ignored. Malformed lines and lines that do not hold a JSON
    object are logged and skipped.

    Raises:
        NotValidJsonInputError: If the document contains no usable record
    """
    records = []
    lines = _decode(jsonl_content).split('\n')

    for line_num, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue

        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping malformed JSON on line {line_num}: {e}")
            continue

        if not isinstance(record, dict):
            logger.warning(f"Skipping line {line_num}: not a JSON object")
            continue

        records.append(record)

    if not records:
        raise NotValidJsonInputError("JSONL content contains no valid JSON records")

    return records


def _flatten_records(
    records: Sequence[Mapping],
    prefix: str,
    style: SeparatorStyle,
    depth: int,
    preserve_sequences: bool,
) -> Tuple[List[Dict[str, Any]], List[str]]:
    flattener = _flattener_for(preserve_sequences)
    flat_records = [flattener(record, prefix, style, depth) for record in records]

    fields: Set[str] = set()
    for flat_record in flat_records:
        fields.update(flat_record.keys())

    logger.debug(f"Flattened {len(flat_records)} records into {len(fields)} fields")

    # Sorted for consistent column ordering
    return flat_records, sorted(fields)


def _complete_records(flat_records: List[Dict[str, Any]], fields: List[str]) -> List[Dict[str, Any]]:
    return [{field: flat_record.get(field) for field in fields} for flat_record in flat_records]


def detect_all_jsonl_fields(
    jsonl_content: TextContent,
    prefix: str = "",
    style: SeparatorStyle = DEFAULT_STYLE,
    depth: int = UNLIMITED_DEPTH,
    preserve_sequences: bool = False,
) -> List[str]:
    """
    Detect all unique flattened field names across all records in a JSONL document.

    Records with different shapes contribute different keys; the union gives a
    schema every record can be laid out against.

    Returns:
        A sorted list of all unique flat keys
    """
    records = parse_jsonl_records(jsonl_content)
    _, fields = _flatten_records(records, prefix, style, depth, preserve_sequences)
    return fields


def flatten_jsonl(
    jsonl_content: TextContent,
    prefix: str = "",
    style: SeparatorStyle = DEFAULT_STYLE,
    depth: int = UNLIMITED_DEPTH,
    preserve_sequences: bool = False,
) -> List[Dict[str, Any]]:
    """
    Flatten every record of a JSONL document into records sharing one schema.

    Fields a record does not have are filled with None.
    """
    records = parse_jsonl_records(jsonl_content)
    flat_records, fields = _flatten_records(records, prefix, style, depth, preserve_sequences)
    return _complete_records(flat_records, fields)


def clean_column_name(name: str) -> str:
    """Lower-case a column name and replace spaces and hyphens with underscores."""
    return name.lower().replace(' ', '_').replace('-', '_')


def records_to_dataframe(
    records: Sequence[Mapping],
    prefix: str = "",
    style: SeparatorStyle = DEFAULT_STYLE,
    depth: int = UNLIMITED_DEPTH,
    preserve_sequences: bool = False,
    clean_columns: bool = False,
) -> pd.DataFrame:
    """
    Flatten nested records into a DataFrame with one column per flat key.

    Args:
        records: The nested mappings to flatten, one row each
        prefix: Text prepended to every produced key
        style: The separator style for nested key segments
        depth: Number of nesting levels to collapse into the key (-1 for no limit)
        preserve_sequences: Keep lists as cell values instead of indexed columns
        clean_columns: Normalize column names with :func:`clean_column_name`

    Returns:
        A DataFrame whose columns are the sorted union of flat keys

    Raises:
        NotValidJsonInputError: If ``records`` is empty
        NotValidInputError: If a record is not a mapping
    """
    if not records:
        raise NotValidJsonInputError("No records to convert")

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise NotValidInputError(f"not a valid input: record {index} must be a mapping")

    flat_records, fields = _flatten_records(records, prefix, style, depth, preserve_sequences)
    df = pd.DataFrame(_complete_records(flat_records, fields), columns=fields)

    if clean_columns:
        df.columns = [clean_column_name(col) for col in df.columns]

    logger.debug(f"Converted {len(df)} records into {len(df.columns)} columns")
    return df


def convert_jsonl_to_dataframe(
    jsonl_content: TextContent,
    prefix: str = "",
    style: SeparatorStyle = DEFAULT_STYLE,
    depth: int = UNLIMITED_DEPTH,
    preserve_sequences: bool = False,
    clean_columns: bool = False,
) -> pd.DataFrame:
    """
    Convert a JSONL document into a DataFrame of flattened records.

    This function processes JSONL (JSON Lines) content by:
    1. Parsing each JSON object line, skipping malformed ones
    2. Flattening nested structures with the given separator style
    3. Laying every record out against the union of detected fields
    """
    records = parse_jsonl_records(jsonl_content)
    return records_to_dataframe(
        records,
        prefix=prefix,
        style=style,
        depth=depth,
        preserve_sequences=preserve_sequences,
        clean_columns=clean_columns,
    )
