"""
factorlab: categorical variables (factors) for survey analysis.

Unordered and ordered factors, level editing, and safe conversion between
labels, codes and the original numeric values, plus the descriptive
summaries a survey tutorial builds on them.
"""

from factorlab.factor_core import (
    FactorError,
    DuplicateLabelError,
    UnknownLabelError,
    UnorderedComparisonError,
    LevelMismatchError,
    NonNumericLabelError,
    CodeRangeError,
    CategorySet,
    CategoricalColumn,
    MISSING,
    add_level,
    relabel_observation,
    drop_observations_with_label,
    drop_missing,
    compact_levels,
    merge_levels,
    reorder_levels,
    rename_levels,
    to_numeric,
    codes_as_numeric,
    from_codes,
)
from factorlab.factor_encoder import SurveyEncoder, to_pandas, from_pandas, dummy_frame
from factorlab.factor_analysis import SurveyAnalysis
from factorlab.factor_sample import generate_sample_survey

__version__ = "1.0.0"
