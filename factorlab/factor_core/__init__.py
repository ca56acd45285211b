from .errors import (
    FactorError,
    DuplicateLabelError,
    UnknownLabelError,
    UnorderedComparisonError,
    LevelMismatchError,
    NonNumericLabelError,
    CodeRangeError,
)
from .category_set import CategorySet
from .column import MISSING, CategoricalColumn, is_missing
from .level_editor import (
    add_level,
    relabel_observation,
    drop_observations_with_label,
    drop_missing,
    compact_levels,
    merge_levels,
    reorder_levels,
    rename_levels,
)
from .numeric_bridge import to_numeric, codes_as_numeric, from_codes
