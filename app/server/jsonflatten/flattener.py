import logging
from collections.abc import Mapping
from typing import Any, Dict

from .constants import DEFAULT_STYLE, UNLIMITED_DEPTH, SeparatorStyle
from .errors import NotValidInputError

logger = logging.getLogger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def compose_key(top: bool, prefix: str, sub_key: str, style: SeparatorStyle) -> str:
    """
    Build the flat key for ``sub_key`` nested under ``prefix``.

    The outermost level is appended to the prefix as-is; deeper levels are
    decorated with the style's before/middle/after strings.

    Examples:
        >>> compose_key(True, 'flag-', 'a', DOT_STYLE)
        'flag-a'

        >>> compose_key(False, 'a', 'b', RAILS_STYLE)
        'a[b]'
    """
    if top:
        return prefix + sub_key
    return prefix + style.before + style.middle + sub_key + style.after


def flatten_into(
    top: bool,
    flat_map: Dict[str, Any],
    nested: Any,
    prefix: str,
    style: SeparatorStyle,
    depth: int,
    preserve_sequences: bool,
) -> None:
    """
    Recursively write the flattened form of ``nested`` into ``flat_map``.

    Args:
        top: Whether ``nested`` is the outermost value (its keys are not decorated)
        flat_map: The output mapping, filled in place
        nested: The mapping or sequence to decompose
        prefix: The key built so far for ``nested``
        style: The separator style used for nested key segments
        depth: Remaining levels to unwrap; 0 stores ``nested`` verbatim and a
            negative value never runs out
        preserve_sequences: Keep lists intact instead of decomposing them by index

    Raises:
        NotValidInputError: If ``nested`` is neither a mapping nor a sequence
    """
    if depth == 0:
        flat_map[prefix] = nested
        return

    if isinstance(nested, Mapping):
        items = ((str(key), value) for key, value in nested.items())
    elif _is_sequence(nested):
        if preserve_sequences:
            flat_map[prefix] = nested
            return
        items = ((str(index), value) for index, value in enumerate(nested))
    else:
        raise NotValidInputError()

    for sub_key, value in items:
        new_key = compose_key(top, prefix, sub_key, style)

        if isinstance(value, Mapping) or (_is_sequence(value) and not preserve_sequences):
            flatten_into(False, flat_map, value, new_key, style, depth - 1, preserve_sequences)
        else:
            flat_map[new_key] = value


def _flatten(
    nested: Any,
    prefix: str,
    style: SeparatorStyle,
    depth: int,
    preserve_sequences: bool,
) -> Dict[str, Any]:
    # The first call spends one level entering the walk, so a positive depth
    # counts nesting levels collapsed into the key, not recursive calls.
    if depth > 0:
        depth += 1

    flat_map: Dict[str, Any] = {}
    flatten_into(True, flat_map, nested, prefix, style, depth, preserve_sequences)

    logger.debug(f"Flattened input into {len(flat_map)} keys")
    return flat_map


def flatten(
    nested: Mapping,
    prefix: str = "",
    style: SeparatorStyle = DEFAULT_STYLE,
    depth: int = UNLIMITED_DEPTH,
) -> Dict[str, Any]:
    """
    Flatten a nested mapping into a single-level dictionary.

    Nested mappings and lists are unwrapped into compound keys built with the
    given separator style. List elements are keyed by their index.

    Args:
        nested: The nested structure to flatten
        prefix: Text prepended to every produced key
        style: The separator style for nested key segments
        depth: Number of nesting levels to collapse into the key; 0 stores the
            whole input under ``prefix`` and -1 flattens without limit

    Returns:
        A flat dictionary; sub-trees below ``depth`` are kept as-is

    Raises:
        NotValidInputError: If ``nested`` is not a mapping or sequence

    Examples:
        >>> flatten({'a': {'b': 1, 'c': [2, 3]}})
        {'a.b': 1, 'a.c.0': 2, 'a.c.1': 3}

        >>> flatten({'a': {'b': {'c': 1}}}, style=UNDERSCORE_STYLE, depth=1)
        {'a_b': {'c': 1}}
    """
    return _flatten(nested, prefix, style, depth, False)


def flatten_preserving_sequences(
    nested: Mapping,
    prefix: str = "",
    style: SeparatorStyle = DEFAULT_STYLE,
    depth: int = UNLIMITED_DEPTH,
) -> Dict[str, Any]:
    """
    Flatten a nested mapping like :func:`flatten`, keeping lists intact as values.

    Examples:
        >>> flatten_preserving_sequences({'z': ['one', 'two'], 'a': {'b': 1}})
        {'z': ['one', 'two'], 'a.b': 1}
    """
    return _flatten(nested, prefix, style, depth, True)
