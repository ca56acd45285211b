# File: factorlab/factor_core/numeric_bridge.py

"""
Conversions between categorical columns and numbers.

A column's codes are positions in its level set, not data. `to_numeric`
recovers the original numbers from the label text and never falls back to
codes; callers who really want the codes ask for them by name with
`codes_as_numeric`.
"""

import math
import numbers
import re
from typing import Iterable, List, Optional, Sequence, Union

from .category_set import CategorySet
from .column import MISSING, CategoricalColumn, is_missing
from .errors import CodeRangeError, NonNumericLabelError

Number = Union[int, float]

_INT_TEXT = re.compile(r'-?[0-9]+')
_FLOAT_TEXT = re.compile(r'-?([0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)([eE][-+]?[0-9]+)?')


def _parse_number(label: str) -> Number:
    """
    Parses a stringified original value. Integers stay integers.

    Only the plain ASCII forms that str() gives for an int or a float are
    accepted: no surrounding whitespace, no underscores, no leading '+'.
    """
    if _INT_TEXT.fullmatch(label):
        return int(label)
    if not _FLOAT_TEXT.fullmatch(label):
        raise NonNumericLabelError(f"Label '{label}' is not the string form of a number.")
    value = float(label)
    if not math.isfinite(value):
        raise NonNumericLabelError(f"Label '{label}' is not a finite number.")
    return value


def to_numeric(column: CategoricalColumn) -> List[Optional[Number]]:
    """
    Returns the original numeric values by parsing each observation's label.

    Fails with NonNumericLabelError if any non-missing label is not a number,
    so codes are never passed off as data.
    """
    parsed = {}
    values = []
    for label in column.labels():
        if label is MISSING:
            values.append(MISSING)
            continue
        if label not in parsed:
            parsed[label] = _parse_number(label)
        values.append(parsed[label])
    return values


def codes_as_numeric(column: CategoricalColumn) -> List[Optional[int]]:
    """Returns the level positions (codes) themselves. These are not the original values."""
    return column.codes()


def from_codes(codes: Iterable, labels: Sequence[str], ordered: bool = False) -> CategoricalColumn:
    """
    Builds a column from integer codes that index into `labels`.

    None, NaN and -1 are read as missing. Any other code outside the label
    range raises CodeRangeError instead of being coerced.
    """
    categories = CategorySet(labels, ordered=ordered)
    clean = []
    for code in codes:
        if is_missing(code) or code == -1:
            clean.append(MISSING)
            continue
        if isinstance(code, float) and code.is_integer():
            code = int(code)
        if isinstance(code, bool) or not isinstance(code, numbers.Integral) or not 0 <= code < len(categories):
            raise CodeRangeError(f"Code {code!r} does not index any of the {len(categories)} labels.")
        clean.append(int(code))
    return CategoricalColumn(clean, categories)
