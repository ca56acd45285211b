# File: factorlab/factor_encoder/pandas_bridge.py

import numpy as np
import pandas as pd
from sklearn.preprocessing import OneHotEncoder

from factorlab.factor_core import MISSING, CategoricalColumn, from_codes


def to_pandas(column: CategoricalColumn, name: str = None) -> pd.Series:
    """Converts a column to a pandas Series with a matching categorical dtype."""
    codes = [-1 if code is MISSING else code for code in column.codes()]
    categorical = pd.Categorical.from_codes(codes, categories=column.levels, ordered=column.ordered)
    return pd.Series(categorical, name=name)


def from_pandas(series: pd.Series) -> CategoricalColumn:
    """
    Builds a column from a pandas Series.

    A categorical dtype keeps its categories (as strings), their order and the
    ordered flag. Any other dtype is treated as raw survey values.
    """
    if not isinstance(series, pd.Series):
        series = pd.Series(series)
    if isinstance(series.dtype, pd.CategoricalDtype):
        labels = [str(category) for category in series.cat.categories]
        return from_codes(series.cat.codes.tolist(), labels, ordered=series.cat.ordered)
    return CategoricalColumn.from_raw(series.tolist())


def dummy_frame(column: CategoricalColumn, name: str = 'x', drop_first: bool = True) -> pd.DataFrame:
    """
    Treatment (one-hot) coding of a column for a regression model.

    With drop_first=True the first level is the reference category and gets no
    indicator column. Missing observations become rows of <NA>.

    Returns:
        pd.DataFrame: One nullable Int64 column per coded level, named
                      '<name>_<label>'.
    """
    levels = column.levels
    if not levels:
        return pd.DataFrame(index=range(len(column)))

    encoder = OneHotEncoder(
        categories=[levels],
        drop='first' if drop_first else None,
        sparse_output=False,
        dtype=int,
    )
    encoder.fit(np.array(levels, dtype=object).reshape(-1, 1))
    feature_names = list(encoder.get_feature_names_out([name]))

    labels = column.labels()
    present = [i for i, label in enumerate(labels) if label is not MISSING]
    if present:
        observed = np.array([labels[i] for i in present], dtype=object).reshape(-1, 1)
        matrix = encoder.transform(observed)
    else:
        matrix = np.zeros((0, len(feature_names)), dtype=int)

    frame = pd.DataFrame(matrix, index=present, columns=feature_names)
    return frame.reindex(range(len(labels))).astype('Int64')
