import pytest

from factorlab import CategoricalColumn


@pytest.fixture
def vote():
    return CategoricalColumn.from_raw([0, 1, 1, 0], labels={0: "Tory", 1: "Labour"})


@pytest.fixture
def income():
    raw = ["low", "high", "very_high", "medium", "high", None]
    return CategoricalColumn.from_raw(raw).as_ordered(["low", "medium", "high", "very_high"])
