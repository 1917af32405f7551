"""
Separator styles and depth settings for the flattener.

A separator style decorates every nested key segment with a before/middle/after
triple; the outermost key segment is never decorated. A depth counts the
nesting levels collapsed into a key: 0 stores the input as-is under the prefix
and any negative value flattens all the way down to scalars.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class SeparatorStyle:
    """How a nested key segment is joined to its parent key."""

    before: str = ""  # prepended to the segment
    middle: str = ""  # placed between parent and segment
    after: str = ""  # appended to the segment


# Predefined separator styles
# Example: {"a": {"b": 1}} → "a.b", "a/b", "a[b]", "a_b"
DOT_STYLE = SeparatorStyle(middle=".")
PATH_STYLE = SeparatorStyle(middle="/")
RAILS_STYLE = SeparatorStyle(before="[", after="]")
UNDERSCORE_STYLE = SeparatorStyle(middle="_")

DEFAULT_STYLE = DOT_STYLE

# Depth of 0 stores the whole input under the prefix without flattening
NO_FLATTENING_DEPTH = 0

# Any negative depth flattens without limit
UNLIMITED_DEPTH = -1

# Cheap lexical check that a JSON document holds an object
JSON_OBJECT_PATTERN = re.compile(r"^[ \t\n\r]*\{")
