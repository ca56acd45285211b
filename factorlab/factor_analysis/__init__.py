from .analysis_manager import SurveyAnalysis
