from .sample_data import generate_sample_survey
