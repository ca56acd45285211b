# File: factorlab/factor_core/column.py

import numbers
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

import pandas as pd

from .category_set import CategorySet
from .errors import CodeRangeError, LevelMismatchError, UnorderedComparisonError

# Missing observations are stored as None in both codes() and labels().
MISSING = None


def is_missing(value: Any) -> bool:
    """True for None and for any scalar pandas treats as NA (NaN, pd.NA, NaT)."""
    if value is None:
        return True
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def _sorted_levels(distinct: Dict[str, Any]) -> List[str]:
    raw = list(distinct.values())
    if all(isinstance(v, numbers.Real) and not isinstance(v, bool) for v in raw):
        return sorted(distinct, key=lambda text: distinct[text])
    return sorted(distinct)


class CategoricalColumn:
    """
    An immutable sequence of observations coded against one CategorySet.

    Each observation is either a code (its label's position in the set) or
    MISSING. Codes only mean something relative to the attached set, so two
    columns are equal only when both their codes and their sets match.
    """

    __slots__ = ('_codes', '_categories')

    def __init__(self, codes: Iterable[Optional[int]], categories: CategorySet):
        if not isinstance(categories, CategorySet):
            raise TypeError("'categories' must be a CategorySet.")
        codes = tuple(codes)
        n_levels = len(categories)
        for code in codes:
            if code is MISSING:
                continue
            if isinstance(code, bool) or not isinstance(code, numbers.Integral) or not 0 <= code < n_levels:
                raise CodeRangeError(f"Code {code!r} is outside the level range [0, {n_levels}).")
        self._codes = tuple(MISSING if code is MISSING else int(code) for code in codes)
        self._categories = categories

    # --- Construction ---

    @classmethod
    def from_raw(cls, values: Iterable[Any], labels: Optional[Mapping[Any, str]] = None,
                 order: Optional[Sequence[str]] = None, ordered: bool = False,
                 sort: bool = False) -> 'CategoricalColumn':
        """
        Builds a column from raw survey values.

        Args:
            values: Raw observations (numbers, strings or missing values).
            labels: Optional mapping of raw value -> label. When omitted, the
                    string form of each distinct raw value becomes a label, in
                    first-seen order. Raw values absent from the mapping are
                    stored as missing.
            order: Optional presentation order. Must be a permutation of the
                   label set.
            ordered (bool): Whether the resulting levels carry a total order.
            sort (bool): Sort inferred levels by raw value instead of first-seen
                         order (numerically when every raw value is a number).
                         Ignored when `labels` is given.
        """
        values = list(values)

        if labels is None:
            distinct: Dict[str, Any] = {}
            observed = []
            for value in values:
                if is_missing(value):
                    observed.append(MISSING)
                    continue
                text = str(value)
                distinct.setdefault(text, value)
                observed.append(text)
            level_labels = list(distinct)
            if sort:
                level_labels = _sorted_levels(distinct)
        else:
            mapping = dict(labels)
            # Several raw values may share one label; the label is declared once.
            level_labels = list(dict.fromkeys(mapping.values()))
            observed = [MISSING if is_missing(value) else mapping.get(value, MISSING) for value in values]

        if order is not None:
            order = list(order)
            if not CategorySet(level_labels).is_permutation(order):
                raise LevelMismatchError(
                    f"Order {order} is not a permutation of the levels {level_labels}."
                )
            level_labels = order

        categories = CategorySet(level_labels, ordered=ordered)
        codes = [MISSING if label is MISSING else categories.index_of(label) for label in observed]
        return cls(codes, categories)

    @classmethod
    def from_labels(cls, labels: Iterable[Optional[str]], categories: CategorySet) -> 'CategoricalColumn':
        """Codes a sequence of labels (or missing values) against an existing set."""
        codes = [MISSING if is_missing(label) else categories.index_of(label) for label in labels]
        return cls(codes, categories)

    # --- Read interface ---

    @property
    def categories(self) -> CategorySet:
        return self._categories

    @property
    def levels(self) -> List[str]:
        return list(self._categories.labels)

    @property
    def ordered(self) -> bool:
        return self._categories.ordered

    def codes(self) -> List[Optional[int]]:
        return list(self._codes)

    def labels(self) -> List[Optional[str]]:
        cats = self._categories
        return [MISSING if code is MISSING else cats[code] for code in self._codes]

    def counts(self) -> Dict[str, int]:
        """Observation count per level, in level order. Zero-count levels are included."""
        tally = [0] * len(self._categories)
        for code in self._codes:
            if code is not MISSING:
                tally[code] += 1
        return dict(zip(self._categories.labels, tally))

    def missing_count(self) -> int:
        return sum(1 for code in self._codes if code is MISSING)

    # --- Ordering ---

    def as_ordered(self, order: Sequence[str]) -> 'CategoricalColumn':
        """
        Rebinds the column to an ordered level set. `order` must hold exactly
        the current labels; no level is silently added or dropped.
        """
        order = list(order)
        if not self._categories.is_permutation(order):
            raise LevelMismatchError(f"Order {order} does not match the levels {self.levels}.")
        return self._recode(CategorySet(order, ordered=True))

    def as_unordered(self) -> 'CategoricalColumn':
        return CategoricalColumn(self._codes, self._categories.as_unordered())

    def compare(self, label: str) -> List[Optional[int]]:
        """Compares every observation with `label`: -1, 0, 1, or None for missing."""
        cats = self._categories
        if not cats.ordered:
            raise UnorderedComparisonError("Observations of an unordered column cannot be compared.")
        pivot = cats.index_of(label)
        return [MISSING if code is MISSING else (code > pivot) - (code < pivot) for code in self._codes]

    def min(self) -> Optional[str]:
        return self._extreme(min)

    def max(self) -> Optional[str]:
        return self._extreme(max)

    def _extreme(self, pick) -> Optional[str]:
        if not self.ordered:
            raise UnorderedComparisonError("min/max require an ordered column.")
        present = [code for code in self._codes if code is not MISSING]
        if not present:
            return MISSING
        return self._categories[pick(present)]

    def _recode(self, categories: CategorySet) -> 'CategoricalColumn':
        """Re-expresses the same labels against another set holding all of them."""
        return CategoricalColumn.from_labels(self.labels(), categories)

    # --- Container protocol ---

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter(self.labels())

    def __getitem__(self, position):
        if isinstance(position, slice):
            return CategoricalColumn(self._codes[position], self._categories)
        code = self._codes[position]
        return MISSING if code is MISSING else self._categories[code]

    def __eq__(self, other) -> bool:
        if not isinstance(other, CategoricalColumn):
            return NotImplemented
        return self._codes == other._codes and self._categories == other._categories

    def __hash__(self) -> int:
        return hash((self._codes, self._categories))

    def __repr__(self) -> str:
        shown = ', '.join('NA' if label is MISSING else label for label in self.labels()[:10])
        more = ', ...' if len(self) > 10 else ''
        return f"CategoricalColumn([{shown}{more}], levels={self._categories!r})"
