# File: factorlab/factor_sample/sample_data.py

import numpy as np
import pandas as pd

from factorlab.config import AppConfig

# Rough shares of the four income bands, lowest first.
INCOME_WEIGHTS = [0.3, 0.35, 0.25, 0.1]


def generate_sample_survey(n: int = None, seed: int = None, missing_rate: float = 0.0) -> pd.DataFrame:
    """
    Generates a small raw survey dataset for trying out the factor tools.

    Args:
        n: Number of respondents. Defaults to [sample] size in config.toml.
        seed: Seed for numpy's random generator. Defaults to [sample] seed.
        missing_rate: Share of 'satisfaction' answers left blank (None).

    Returns:
        pd.DataFrame: Raw columns 'vote' (0/1), 'age' (int), 'income' (band
                      text), 'satisfaction' (Likert text) and 'region'.
    """
    settings = AppConfig.get_sample_settings()
    n = settings.get('size', 200) if n is None else n
    seed = settings.get('seed', 42) if seed is None else seed
    if n < 0:
        raise ValueError(f"Sample size must not be negative, got {n}.")
    if not 0.0 <= missing_rate <= 1.0:
        raise ValueError(f"missing_rate must be between 0 and 1, got {missing_rate}.")

    rng = np.random.default_rng(seed)
    income_levels = AppConfig.get_prototype('income_band')['levels']
    likert_levels = AppConfig.get_prototype('likert_5_point')['levels']
    regions = settings.get('regions', ["North", "South"])

    satisfaction = rng.choice(likert_levels, size=n).astype(object)
    satisfaction[rng.random(n) < missing_rate] = None

    return pd.DataFrame({
        'vote': rng.integers(0, 2, size=n),
        'age': rng.integers(settings.get('min_age', 18), settings.get('max_age', 99) + 1, size=n),
        'income': rng.choice(income_levels, size=n, p=INCOME_WEIGHTS if len(income_levels) == len(INCOME_WEIGHTS) else None),
        'satisfaction': satisfaction,
        'region': rng.choice(regions, size=n),
    })
