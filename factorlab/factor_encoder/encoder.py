# File: factorlab/factor_encoder/encoder.py

import re
from collections import defaultdict
from typing import Any, Dict, List, Tuple

import pandas as pd

from factorlab.config import AppConfig
from factorlab.factor_core import CategoricalColumn, CategorySet, MISSING, is_missing
from .pandas_bridge import to_pandas


class SurveyEncoder:
    """
    A configuration-driven class that turns raw survey columns into factors.

    Each configured column becomes a CategoricalColumn. Raw values that do not
    match any declared level are stored as missing and reported in the
    warnings list, so nothing is dropped silently. Expected config structure:
    {
        "Labelled": {"vote": {"labels": {0: "Tory", 1: "Labour"}}},
        "Ordinal":  {"income": {"prototype": "income_band"}},
        "Likert":   {"q9": {"order": ["Disagree", "Neutral", "Agree"]}},
        "Nominal":  {"region": {}},
        "column_map": {"q9": "The service was easy to use."}
    }
    """

    def __init__(self, dataframe: pd.DataFrame, config: Dict[str, Any]):
        if not isinstance(dataframe, pd.DataFrame):
            raise TypeError("Input 'dataframe' must be a pandas DataFrame.")
        if not isinstance(config, dict):
            raise TypeError("Input 'config' must be a dictionary.")

        self.df = dataframe.copy()
        self.config = config
        self.column_map = self.config.get('column_map', {})
        self.columns: Dict[str, CategoricalColumn] = {}
        self.codebook = defaultdict(dict)
        self.warnings: List[Dict[str, Any]] = []

    def encode(self) -> Tuple[Dict[str, CategoricalColumn], Dict[str, dict], List[Dict[str, Any]]]:
        """
        Runs every configured encoder.

        Returns:
            Tuple: the encoded columns keyed by column name, the codebook and
                   the list of warnings.
        """
        print("--- Starting Factor Encoding Process ---")
        self._encode_labelled()
        self._encode_ordinal('Ordinal')
        self._encode_ordinal('Likert')
        self._encode_nominal()
        print("--- Factor Encoding Process Complete ---")

        return self.columns, dict(self.codebook), self.warnings

    def encoded_frame(self) -> pd.DataFrame:
        """A DataFrame of pandas categorical Series, one per encoded column."""
        return pd.DataFrame(
            {key: to_pandas(column, name=key).set_axis(self.df.index) for key, column in self.columns.items()},
            index=self.df.index,
        )

    def _normalize_text(self, value) -> str:
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if not isinstance(value, str):
            value = str(value)
        return re.sub(r'\s+', ' ', value).strip().lower()

    def _column_present(self, col_key: str) -> bool:
        if col_key in self.df.columns:
            return True
        print(f"WARNING: Column key '{col_key}' not found in the input DataFrame. Skipping.")
        self.warnings.append({
            "column_key": col_key,
            "unmapped_values": ["Configuration Error: column not found in the data."]
        })
        return False

    def _resolve_order(self, col_key: str, settings: dict) -> List[str]:
        if settings.get('order'):
            return list(settings['order'])
        if settings.get('prototype'):
            return list(AppConfig.get_prototype(settings['prototype'])['levels'])
        raise ValueError(f"Column '{col_key}' needs either an 'order' list or a 'prototype' name.")

    def _perform_smart_mapping(self, col_key: str, definition_map: Dict[Any, str],
                               categories: CategorySet, encoder_type: str):
        """
        Matches raw values to labels ignoring case and surrounding whitespace,
        then codes the column against `categories`.
        """
        normalized_def_map = {self._normalize_text(k): v for k, v in definition_map.items()}
        raw_values = self.df[col_key].tolist()

        observed, unmapped = [], set()
        for value in raw_values:
            if is_missing(value):
                observed.append(MISSING)
                continue
            label = normalized_def_map.get(self._normalize_text(value), MISSING)
            if label is MISSING:
                unmapped.add(str(value))
            observed.append(label)

        if unmapped:
            print(f"WARNING: {len(unmapped)} value(s) in '{col_key}' match no level and were set to missing.")
            self.warnings.append({
                "column_key": col_key,
                "unmapped_values": sorted(unmapped)
            })

        self._store(col_key, CategoricalColumn.from_labels(observed, categories), encoder_type)

    def _store(self, col_key: str, column: CategoricalColumn, encoder_type: str):
        self.columns[col_key] = column
        self.codebook[col_key]['question_text'] = self.column_map.get(col_key, "N/A")
        self.codebook[col_key]['encoder_type'] = encoder_type
        self.codebook[col_key]['ordered'] = column.ordered
        self.codebook[col_key]['value_map'] = dict(enumerate(column.levels))

    def _encode_labelled(self):
        labelled_configs = self.config.get('Labelled', {})
        for col_key, settings in labelled_configs.items():
            if not self._column_present(col_key): continue
            value_labels = settings.get('labels')
            if not value_labels and settings.get('prototype'):
                # Prototype levels are indexed by their raw code: 0, 1, 2, ...
                value_labels = dict(enumerate(AppConfig.get_prototype(settings['prototype'])['levels']))
            if not value_labels or not isinstance(value_labels, dict):
                raise ValueError(f"Labelled column '{col_key}' needs a 'labels' mapping or a 'prototype' name.")

            categories = CategorySet(dict.fromkeys(value_labels.values()), ordered=settings.get('ordered', False))
            self._perform_smart_mapping(col_key, value_labels, categories, 'Labelled')

    def _encode_ordinal(self, section: str):
        ordinal_configs = self.config.get(section, {})
        for col_key, settings in ordinal_configs.items():
            if not self._column_present(col_key): continue
            order = self._resolve_order(col_key, settings)
            categories = CategorySet(order, ordered=True)
            self._perform_smart_mapping(col_key, {label: label for label in order}, categories, section)

    def _encode_nominal(self):
        nominal_configs = self.config.get('Nominal', {})
        for col_key, settings in nominal_configs.items():
            if not self._column_present(col_key): continue
            if settings.get('order'):
                order = list(settings['order'])
                self._perform_smart_mapping(col_key, {label: label for label in order}, CategorySet(order), 'Nominal')
            else:
                # Levels inferred from the data, sorted the way pandas' astype('category') sorts them.
                column = CategoricalColumn.from_raw(self.df[col_key].tolist(), sort=True)
                self._store(col_key, column, 'Nominal')
