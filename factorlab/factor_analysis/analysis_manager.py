# File: factorlab/factor_analysis/analysis_manager.py

from typing import Dict, Iterable, Optional

import pandas as pd

from factorlab.factor_core import CategoricalColumn, merge_levels
from factorlab.factor_encoder.encoder import SurveyEncoder
from . import analysis_utils as utils


class SurveyAnalysis:
    """
    Runs the descriptive steps of a survey analysis over encoded factors.

    Categorical variables are CategoricalColumns; numeric variables stay in a
    DataFrame. Every run_* method returns a result dict with at least a
    'title', a 'table' and an 'interpretation'.
    """

    def __init__(self, columns: Dict[str, CategoricalColumn], numeric: Optional[pd.DataFrame] = None,
                 column_map: Optional[Dict[str, str]] = None, codebook: Optional[dict] = None):
        self.columns = dict(columns)
        self.codebook = codebook or {}
        self.warnings = []
        self.numeric = numeric if numeric is not None else pd.DataFrame()
        self.column_map = column_map or {}

    @classmethod
    def from_dataframe(cls, dataframe: pd.DataFrame, encoder_config: dict) -> 'SurveyAnalysis':
        """
        Encodes the configured columns of a raw survey frame; every other
        numeric column is kept as a numeric variable.
        """
        encoder = SurveyEncoder(dataframe, encoder_config)
        columns, codebook, warnings = encoder.encode()

        remaining = dataframe.drop(columns=list(columns))
        numeric = remaining.select_dtypes(include="number")
        analysis = cls(columns, numeric=numeric, column_map=encoder.column_map, codebook=codebook)
        analysis.warnings = warnings
        return analysis

    def get_variable_types(self) -> dict:
        return {'categorical': sorted(self.columns), 'numeric': sorted(self.numeric.columns)}

    def _get_column(self, key: str) -> CategoricalColumn:
        if key not in self.columns:
            raise ValueError(f"Categorical variable '{key}' not found. Available: {sorted(self.columns)}")
        return self.columns[key]

    def _get_numeric(self, key: str) -> pd.Series:
        if key not in self.numeric.columns:
            raise ValueError(f"Numeric variable '{key}' not found. Available: {sorted(self.numeric.columns)}")
        return self.numeric[key]

    def run_descriptives(self, value_var: str):
        values = self._get_numeric(value_var)
        table = utils.get_descriptives(values.tolist())
        return {
            'title': f'Descriptive Statistics for {value_var}',
            'table': table,
            'interpretation': (
                f"The table summarizes the {int(values.count())} non-missing value(s) of '{value_var}'."
            )
        }

    def run_categorical_descriptives(self, column: str, include_missing: bool = False):
        factor = self._get_column(column)
        table = utils.frequency_table(factor, include_missing=include_missing)
        kind = "ordered" if factor.ordered else "unordered"
        return {
            'title': f'Categorical Analysis for {self.column_map.get(column, column)}',
            'table': table,
            'proportions': utils.proportions(factor),
            'interpretation': (
                f"The frequency table lists all {len(factor.levels)} levels of this {kind} factor in level order, "
                f"including levels with no responses. {factor.missing_count()} response(s) were missing."
            )
        }

    def run_crosstab(self, row_var: str, col_var: str):
        rows, cols = self._get_column(row_var), self._get_column(col_var)
        table = utils.contingency_table(rows, cols, row_name=row_var, col_name=col_var)
        pct = utils.crosstab_percentages(table)

        result = {
            'title': f'Crosstabulation: {row_var} by {col_var}',
            'table': pct['counts'],
            'row_pct': pct['row_pct'],
            'col_pct': pct['col_pct'],
            'chi2': None, 'p_value': None, 'dof': None,
        }
        try:
            chi2, p, dof, _ = utils.perform_chi_squared(rows, cols)
        except ValueError as e:
            result['interpretation'] = f"The Chi-Squared test could not be run: {e}"
            return result

        sig_text = "statistically significant" if p < 0.05 else "not statistically significant"
        result.update({'chi2': chi2, 'p_value': p, 'dof': dof})
        result['interpretation'] = (
            f"The association between '{row_var}' and '{col_var}' is {sig_text} "
            f"(Chi-Squared = {chi2:.2f}, df = {dof}, p = {p:.3f})."
        )
        return result

    def run_grouped_descriptives(self, value_var: str, group_var: str):
        values = self._get_numeric(value_var)
        groups = self._get_column(group_var)
        table = utils.grouped_descriptives(values.tolist(), groups)
        return {
            'title': f'Descriptive Statistics for {value_var} by {group_var}',
            'table': table,
            'interpretation': f"The table summarizes '{value_var}' separately for each level of '{group_var}'."
        }

    def run_level_merge(self, column: str, source_labels: Iterable[str], target_label: str,
                        new_var_name: Optional[str] = None) -> str:
        """
        Stores a copy of `column` with some levels merged. The original
        variable is kept unless new_var_name is omitted, in which case it is
        replaced.
        """
        factor = self._get_column(column)
        if isinstance(source_labels, str):
            raise TypeError(f"source_labels must be a list of labels, not the string '{source_labels}'.")
        source_labels = list(source_labels)
        name = new_var_name or column
        if new_var_name and new_var_name in self.columns:
            raise ValueError(f"Variable '{new_var_name}' already exists.")

        self.columns[name] = merge_levels(factor, source_labels, target_label)
        return f"Successfully merged levels {sorted(source_labels)} of '{column}' into '{target_label}' as '{name}'."
