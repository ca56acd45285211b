import pytest

from factorlab import (
    CategoricalColumn,
    DuplicateLabelError,
    LevelMismatchError,
    UnknownLabelError,
    add_level,
    compact_levels,
    drop_missing,
    drop_observations_with_label,
    merge_levels,
    relabel_observation,
    rename_levels,
    reorder_levels,
)


def test_add_level_appends_and_keeps_codes(vote):
    extended = add_level(vote, "LibDem")
    assert extended.levels == ["Tory", "Labour", "LibDem"]
    assert extended.codes() == vote.codes()
    assert vote.levels == ["Tory", "Labour"]


def test_add_existing_level(vote):
    with pytest.raises(DuplicateLabelError):
        add_level(vote, "Tory")


def test_relabel_observation(vote):
    changed = relabel_observation(add_level(vote, "LibDem"), 2, "LibDem")
    assert changed.labels() == ["Tory", "Labour", "LibDem", "Tory"]


def test_relabel_to_undeclared_label_leaves_column_unchanged(vote):
    before = vote.labels()
    with pytest.raises(UnknownLabelError):
        relabel_observation(vote, 0, "LibDem")
    assert vote.labels() == before


def test_relabel_out_of_range_position(vote):
    with pytest.raises(IndexError):
        relabel_observation(vote, 10, "Tory")


@pytest.mark.parametrize("position", [-1, -4, True])
def test_relabel_negative_or_bool_position_is_rejected(vote, position):
    before = vote.labels()
    with pytest.raises(IndexError):
        relabel_observation(vote, position, "Labour")
    assert vote.labels() == before


def test_drop_observations_removes_rows_but_keeps_level():
    col = CategoricalColumn.from_raw(["Tory", "Labour", None, "Tory"])
    dropped = drop_observations_with_label(col, "Tory")
    assert dropped.labels() == ["Labour", None]
    assert dropped.levels == ["Tory", "Labour"]
    assert len(col) == 4


def test_drop_observations_with_unknown_label(vote):
    with pytest.raises(UnknownLabelError):
        drop_observations_with_label(vote, "Green")


def test_drop_missing():
    col = CategoricalColumn.from_raw(["a", None, "b"])
    assert drop_missing(col).labels() == ["a", "b"]


def test_compact_levels_renumbers_codes():
    col = CategoricalColumn.from_raw(["c"], labels={"a": "a", "b": "b", "c": "c"})
    compacted = compact_levels(col)
    assert compacted.levels == ["c"]
    assert compacted.codes() == [0]
    assert compacted.labels() == ["c"]


def test_compact_levels_keeps_ordered_flag(income):
    assert compact_levels(income).ordered


def test_add_then_drop_then_compact_restores_levels():
    col = CategoricalColumn.from_raw(["a", "b", "a"])
    cleaned = compact_levels(drop_observations_with_label(add_level(col, "c"), "c"))
    assert cleaned.categories == col.categories
    assert cleaned == col


def test_merge_top_income_bands(income):
    merged = merge_levels(income, {"high", "very_high"}, "high")
    assert merged.levels == ["low", "medium", "high"]
    assert merged.ordered
    assert merged.labels() == ["low", "high", "high", "medium", "high", None]


def test_merge_into_new_label_takes_earliest_source_position():
    col = CategoricalColumn.from_raw(["a", "b", "c", "d"])
    merged = merge_levels(col, ["d", "b"], "bd")
    assert merged.levels == ["a", "bd", "c"]
    assert merged.labels() == ["a", "bd", "c", "bd"]


def test_merge_into_existing_label_outside_sources():
    col = CategoricalColumn.from_raw(["a", "b", "c"])
    merged = merge_levels(col, ["b"], "c")
    assert merged.levels == ["a", "c"]
    assert merged.labels() == ["a", "c", "c"]


def test_merge_keeps_unused_levels():
    col = CategoricalColumn.from_raw(["a"], labels={"a": "a", "b": "b", "c": "c"})
    assert merge_levels(col, ["c"], "z").levels == ["a", "b", "z"]


def test_merge_validates_sources(vote):
    with pytest.raises(UnknownLabelError):
        merge_levels(vote, ["Green"], "Other")
    with pytest.raises(LevelMismatchError):
        merge_levels(vote, [], "Other")


def test_merge_rejects_bare_string_source(income):
    with pytest.raises(TypeError):
        merge_levels(income, "high", "top")


def test_reorder_levels_keeps_labels_and_flag(income):
    reordered = reorder_levels(income, ["very_high", "high", "medium", "low"])
    assert reordered.labels() == income.labels()
    assert reordered.ordered
    assert reordered.codes()[0] == 3
    with pytest.raises(LevelMismatchError):
        reorder_levels(income, ["low", "high"])


def test_rename_levels(vote):
    renamed = rename_levels(vote, {"Tory": "Conservative"})
    assert renamed.levels == ["Conservative", "Labour"]
    assert renamed.codes() == vote.codes()
    assert renamed.labels()[0] == "Conservative"


def test_rename_levels_rejects_collisions_and_unknowns(vote):
    with pytest.raises(DuplicateLabelError):
        rename_levels(vote, {"Tory": "Labour"})
    with pytest.raises(UnknownLabelError):
        rename_levels(vote, {"Green": "Greens"})


def test_rename_levels_can_swap_labels(vote):
    swapped = rename_levels(vote, {"Tory": "Labour", "Labour": "Tory"})
    assert swapped.labels() == ["Labour", "Tory", "Tory", "Labour"]
