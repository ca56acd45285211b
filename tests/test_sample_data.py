import pandas as pd
import pytest

from factorlab import generate_sample_survey


def test_same_seed_gives_same_survey():
    pd.testing.assert_frame_equal(generate_sample_survey(n=30, seed=3), generate_sample_survey(n=30, seed=3))


def test_columns_and_values():
    df = generate_sample_survey(n=40, seed=1)
    assert list(df.columns) == ['vote', 'age', 'income', 'satisfaction', 'region']
    assert len(df) == 40
    assert set(df['vote']) <= {0, 1}
    assert df['age'].between(18, 99).all()
    assert set(df['income']) <= {'low', 'medium', 'high', 'very_high'}
    assert df['satisfaction'].notna().all()


def test_default_size_comes_from_config():
    assert len(generate_sample_survey()) == 200


def test_missing_rate():
    df = generate_sample_survey(n=20, seed=1, missing_rate=1.0)
    assert df['satisfaction'].isna().all()


def test_invalid_arguments():
    with pytest.raises(ValueError):
        generate_sample_survey(n=-1)
    with pytest.raises(ValueError):
        generate_sample_survey(missing_rate=1.5)
