from detection.classifier import AnalysisResult, AnalysisVerdict, classify
from detection.service import AnalysisError, analyze_email, run_analysis

__all__ = [
    'AnalysisResult',
    'AnalysisVerdict',
    'AnalysisError',
    'analyze_email',
    'classify',
    'run_analysis',
]
