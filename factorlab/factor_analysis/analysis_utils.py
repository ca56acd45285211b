# --- START OF FILE analysis_utils.py ---
from typing import Sequence

import numpy as np
import pandas as pd
import scipy.stats as stats

from factorlab.config import AppConfig
from factorlab.factor_core import MISSING, CategoricalColumn
from factorlab.factor_encoder.pandas_bridge import to_pandas


def get_descriptives(values: Sequence) -> pd.DataFrame:
    """Calculates descriptive statistics for a single continuous variable."""
    series = pd.to_numeric(pd.Series(list(values), dtype=object), errors='coerce')
    desc = series.describe().to_frame().reset_index()
    desc.columns = ['Metric', 'Value']
    desc['Value'] = desc['Value'].round(2)
    return desc


def frequency_table(column: CategoricalColumn, include_missing: bool = False) -> pd.DataFrame:
    """
    Frequency table in level order. Levels nobody chose are listed with a
    count of zero rather than left out.
    """
    counts = column.counts()
    if include_missing:
        missing_label = AppConfig.get_missing_label()
        if missing_label in counts:
            raise ValueError(f"Level '{missing_label}' clashes with the label used for missing responses.")
        counts[missing_label] = column.missing_count()

    freq_df = pd.DataFrame({'Category': list(counts.keys()), 'Frequency': list(counts.values())})
    total = freq_df['Frequency'].sum()
    if total:
        freq_df['Percentage (%)'] = (freq_df['Frequency'] / total * 100).round(1)
    else:
        freq_df['Percentage (%)'] = 0.0
    return freq_df


def proportions(column: CategoricalColumn) -> pd.Series:
    """Share of each level among the non-missing observations."""
    counts = pd.Series(column.counts(), dtype=float, name='Proportion')
    total = counts.sum()
    return counts / total if total else counts


def _check_no_total_level(table: pd.DataFrame):
    if 'Total' in table.index or 'Total' in table.columns:
        raise ValueError("A level named 'Total' clashes with the margin totals; rename it first.")


def contingency_table(rows: CategoricalColumn, cols: CategoricalColumn, margins: bool = False,
                      row_name: str = None, col_name: str = None) -> pd.DataFrame:
    """
    Counts of every (row level, column level) pair, observations missing on
    either side left out. Empty cells are kept as zeros.
    """
    if len(rows) != len(cols):
        raise ValueError(f"Both columns must have the same length, got {len(rows)} and {len(cols)}.")

    counts = np.zeros((len(rows.categories), len(cols.categories)), dtype=int)
    for r, c in zip(rows.codes(), cols.codes()):
        if r is MISSING or c is MISSING:
            continue
        counts[r, c] += 1

    table = pd.DataFrame(
        counts,
        index=pd.Index(rows.levels, name=row_name),
        columns=pd.Index(cols.levels, name=col_name),
    )
    if margins:
        _check_no_total_level(table)
        table['Total'] = table.sum(axis=1)
        table.loc['Total'] = table.sum()
    return table


def crosstab_percentages(contingency_table: pd.DataFrame) -> dict:
    """
    Counts with totals plus row and column percentages, similar to SPSS
    crosstab output. Expects a table without margins.
    """
    _check_no_total_level(contingency_table)
    ct_total = contingency_table.copy()
    ct_total['Total'] = ct_total.sum(axis=1)
    ct_total.loc['Total'] = ct_total.sum()

    # Percentages are based on the original table (without totals)
    row_pct = (contingency_table.div(contingency_table.sum(axis=1), axis=0) * 100).fillna(0).round(1)
    col_pct = (contingency_table.div(contingency_table.sum(axis=0), axis=1) * 100).fillna(0).round(1)

    return {'counts': ct_total, 'row_pct': row_pct, 'col_pct': col_pct}


def perform_chi_squared(rows: CategoricalColumn, cols: CategoricalColumn):
    """Performs a Chi-Squared test of independence."""
    table = contingency_table(rows, cols)
    # Levels with no observations would give zero expected frequencies
    table = table.loc[table.sum(axis=1) > 0, table.sum(axis=0) > 0]
    if table.shape[0] < 2 or table.shape[1] < 2:
        raise ValueError("Chi-Squared test requires at least two observed levels in each variable.")
    chi2, p, dof, expected = stats.chi2_contingency(table)
    return chi2, p, dof, table


def grouped_descriptives(values: Sequence, by: CategoricalColumn) -> pd.DataFrame:
    """
    N, Mean, Std. Dev., Min and Max of a numeric variable for every level
    of `by`, in level order.
    """
    values = list(values)
    if len(values) != len(by):
        raise ValueError(f"Values and grouping column must have the same length, got {len(values)} and {len(by)}.")

    df = pd.DataFrame({
        'value': pd.to_numeric(pd.Series(values, dtype=object), errors='coerce'),
        'Group': to_pandas(by),
    })
    stats_df = df.groupby('Group', observed=False)['value'].agg(['count', 'mean', 'std', 'min', 'max'])
    stats_df.columns = ['N', 'Mean', 'Std. Dev.', 'Min', 'Max']
    stats_df['N'] = stats_df['N'].astype(int)
    stats_df = stats_df.round(2)
    stats_df.index = pd.Index([str(level) for level in stats_df.index], name='Group')
    return stats_df.reset_index()
