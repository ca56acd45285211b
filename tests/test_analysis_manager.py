import pytest

from factorlab import SurveyAnalysis, generate_sample_survey


@pytest.fixture
def analysis():
    config = {
        'Labelled': {'vote': {'prototype': 'party_vote'}},
        'Ordinal': {'income': {'prototype': 'income_band'}},
        'Likert': {'satisfaction': {'prototype': 'likert_5_point'}},
        'Nominal': {'region': {}},
    }
    return SurveyAnalysis.from_dataframe(generate_sample_survey(n=60, seed=7, missing_rate=0.1), config)


def test_variable_types(analysis):
    types = analysis.get_variable_types()
    assert types['categorical'] == ['income', 'region', 'satisfaction', 'vote']
    assert types['numeric'] == ['age']


def test_descriptives_for_numeric_variable(analysis):
    result = analysis.run_descriptives('age')
    values = dict(zip(result['table']['Metric'], result['table']['Value']))
    assert values['count'] == analysis.numeric['age'].count()
    assert values['min'] >= 18
    assert 'age' in result['title']
    with pytest.raises(ValueError):
        analysis.run_descriptives('income')


def test_categorical_descriptives(analysis):
    result = analysis.run_categorical_descriptives('income')
    assert result['table']['Category'].tolist() == ['low', 'medium', 'high', 'very_high']
    assert result['table']['Frequency'].sum() == 60
    assert 'ordered factor' in result['interpretation']


def test_crosstab(analysis):
    result = analysis.run_crosstab('vote', 'region')
    assert result['table'].loc['Total', 'Total'] == 60
    assert result['dof'] is not None
    assert 'Chi-Squared' in result['interpretation']


def test_crosstab_reports_untestable_tables(analysis):
    analysis.run_level_merge('vote', ['Tory', 'Labour'], 'Any', new_var_name='any_vote')
    result = analysis.run_crosstab('any_vote', 'region')
    assert result['chi2'] is None
    assert 'could not be run' in result['interpretation']


def test_grouped_descriptives(analysis):
    result = analysis.run_grouped_descriptives('age', 'income')
    assert result['table']['N'].sum() == 60


def test_level_merge_adds_a_variable(analysis):
    message = analysis.run_level_merge('income', ['high', 'very_high'], 'high', new_var_name='income3')
    assert 'income3' in message
    assert analysis.columns['income3'].levels == ['low', 'medium', 'high']
    assert analysis.columns['income'].levels == ['low', 'medium', 'high', 'very_high']
    with pytest.raises(ValueError):
        analysis.run_level_merge('income', ['low'], 'lowest', new_var_name='income3')


def test_unknown_variables(analysis):
    with pytest.raises(ValueError):
        analysis.run_categorical_descriptives('gender')
    with pytest.raises(ValueError):
        analysis.run_grouped_descriptives('height', 'income')


def test_level_merge_rejects_bare_string(analysis):
    with pytest.raises(TypeError):
        analysis.run_level_merge('income', 'high', 'top', new_var_name='income_top')
    assert 'income_top' not in analysis.columns
