# File: factorlab/factor_core/level_editor.py

"""
Level editing for categorical columns.

Every function here returns a new CategoricalColumn and leaves its input
untouched. Operations that discard observations say so in their name
(`drop_observations_with_label`, `drop_missing`); nothing else ever removes
data.
"""

from typing import Iterable, Mapping, Sequence

from .column import MISSING, CategoricalColumn
from .errors import DuplicateLabelError, LevelMismatchError, UnknownLabelError


def add_level(column: CategoricalColumn, new_label: str) -> CategoricalColumn:
    """Declares a new level at the end of the set. Existing codes are unchanged."""
    if new_label in column.categories:
        raise DuplicateLabelError(f"Level '{new_label}' is already declared.")
    categories = column.categories.with_labels(column.levels + [new_label])
    return CategoricalColumn(column.codes(), categories)


def relabel_observation(column: CategoricalColumn, position: int, new_label: str) -> CategoricalColumn:
    """
    Assigns `new_label` to one observation. The label must already be a
    declared level; call add_level first to introduce a new one.
    """
    if isinstance(position, bool) or not 0 <= position < len(column):
        raise IndexError(f"Position {position!r} is outside the column (length {len(column)}).")
    code = column.categories.index_of(new_label)
    codes = column.codes()
    codes[position] = code
    return CategoricalColumn(codes, column.categories)


def drop_observations_with_label(column: CategoricalColumn, label: str) -> CategoricalColumn:
    """
    DESTRUCTIVE: removes every observation carrying `label` from the column.

    The column gets shorter. The level itself stays declared; use
    compact_levels afterwards to remove it from the set as well.
    """
    code = column.categories.index_of(label)
    kept = [c for c in column.codes() if c != code]
    return CategoricalColumn(kept, column.categories)


def drop_missing(column: CategoricalColumn) -> CategoricalColumn:
    """DESTRUCTIVE: removes every missing observation from the column."""
    return CategoricalColumn([c for c in column.codes() if c is not MISSING], column.categories)


def compact_levels(column: CategoricalColumn) -> CategoricalColumn:
    """Drops levels with no observations. Labels are preserved; codes are renumbered."""
    used = [label for label, n in column.counts().items() if n > 0]
    return CategoricalColumn.from_labels(column.labels(), column.categories.with_labels(used))


def merge_levels(column: CategoricalColumn, source_labels: Iterable[str], target_label: str) -> CategoricalColumn:
    """
    Collapses several levels into one.

    Every observation labelled with one of `source_labels` is relabelled
    `target_label`. The source levels leave the set and `target_label` takes
    the level position of the earliest source; all other levels keep their
    relative order. The ordered flag is kept.
    """
    if isinstance(source_labels, str):
        raise TypeError(f"source_labels must be a collection of labels, not the string '{source_labels}'.")
    sources = set(source_labels)
    if not sources:
        raise LevelMismatchError("merge_levels needs at least one source label.")
    for label in sources:
        column.categories.index_of(label)

    merged = []
    for label in column.levels:
        if label in sources:
            if target_label not in merged:
                merged.append(target_label)
        elif label != target_label:
            merged.append(label)

    categories = column.categories.with_labels(merged)
    labels = [target_label if label in sources else label for label in column.labels()]
    return CategoricalColumn.from_labels(labels, categories)


def reorder_levels(column: CategoricalColumn, order: Sequence[str]) -> CategoricalColumn:
    """Changes the level order without touching the observations or the ordered flag."""
    order = list(order)
    if not column.categories.is_permutation(order):
        raise LevelMismatchError(f"Order {order} does not match the levels {column.levels}.")
    return CategoricalColumn.from_labels(column.labels(), column.categories.with_labels(order))


def rename_levels(column: CategoricalColumn, mapping: Mapping[str, str]) -> CategoricalColumn:
    """
    Renames levels in place: each old label keeps its position and its
    observations. Renaming onto a label that remains declared is refused.
    """
    for old in mapping:
        if old not in column.categories:
            raise UnknownLabelError(f"Cannot rename '{old}': it is not a declared level.")
    renamed = [mapping.get(label, label) for label in column.levels]
    if len(set(renamed)) != len(renamed):
        raise DuplicateLabelError(f"Renaming {dict(mapping)} would produce duplicate levels: {renamed}.")
    return CategoricalColumn(column.codes(), column.categories.with_labels(renamed))
