"""FitScore - progress and gamification scoring for the fitness platform"""

__version__ = "1.0.0"
