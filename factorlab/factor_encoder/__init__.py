from .pandas_bridge import to_pandas, from_pandas, dummy_frame
from .encoder import SurveyEncoder
