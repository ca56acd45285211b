# File: factorlab/factor_core/category_set.py

from typing import Iterable, Iterator, Optional, Tuple

from .errors import DuplicateLabelError, UnknownLabelError, UnorderedComparisonError


class CategorySet:
    """
    The ordered collection of labels (levels) that a categorical column may take.

    The sequence order is the presentation order and, for an ordered set,
    the comparison order. A set never changes after construction; every
    edit builds a new one.
    """

    __slots__ = ('_labels', '_ordered', '_positions')

    def __init__(self, labels: Iterable[str], ordered: bool = False):
        """
        Args:
            labels: The level labels in presentation order. Must be unique strings.
            ordered (bool): Whether the order is also a total order over the levels.
        """
        labels = tuple(labels)
        positions = {}
        for i, label in enumerate(labels):
            if not isinstance(label, str):
                raise TypeError(f"Level labels must be strings, got {type(label).__name__}: {label!r}")
            if label in positions:
                raise DuplicateLabelError(f"Label '{label}' appears more than once in the level set.")
            positions[label] = i

        self._labels: Tuple[str, ...] = labels
        self._ordered = bool(ordered)
        self._positions = positions

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    @property
    def ordered(self) -> bool:
        return self._ordered

    def index_of(self, label: str) -> int:
        """Returns the code (position) of a label."""
        try:
            return self._positions[label]
        except (KeyError, TypeError):
            raise UnknownLabelError(f"Label '{label}' is not a declared level. Levels: {list(self._labels)}") from None

    def compare(self, label_a: str, label_b: str) -> int:
        """
        Compares two labels by their position in an ordered set.

        Returns:
            int: -1 if label_a comes before label_b, 0 if equal, 1 if after.
        """
        if not self._ordered:
            raise UnorderedComparisonError("Labels of an unordered level set cannot be compared.")
        a, b = self.index_of(label_a), self.index_of(label_b)
        return (a > b) - (a < b)

    def with_labels(self, labels: Iterable[str], ordered: Optional[bool] = None) -> 'CategorySet':
        """Builds a new set, keeping this set's ordered flag unless one is given."""
        return CategorySet(labels, self._ordered if ordered is None else ordered)

    def as_ordered(self) -> 'CategorySet':
        return CategorySet(self._labels, ordered=True)

    def as_unordered(self) -> 'CategorySet':
        return CategorySet(self._labels, ordered=False)

    def is_permutation(self, labels: Iterable[str]) -> bool:
        """True when `labels` holds exactly this set's labels, each once, in any order."""
        labels = list(labels)
        return len(labels) == len(self._labels) and set(labels) == set(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __getitem__(self, code: int) -> str:
        return self._labels[code]

    def __contains__(self, label) -> bool:
        try:
            return label in self._positions
        except TypeError:
            return False

    def __eq__(self, other) -> bool:
        if not isinstance(other, CategorySet):
            return NotImplemented
        return self._labels == other._labels and self._ordered == other._ordered

    def __hash__(self) -> int:
        return hash((self._labels, self._ordered))

    def __repr__(self) -> str:
        sep = ' < ' if self._ordered else ', '
        return f"CategorySet({sep.join(self._labels)})"
