"""
Service Layer Package

Business logic between the HTTP layer and the data access layer.

- ProgressService: XP/levels, habit logs and streaks, exercise media priority
"""

from fitscore.services.progress_service import ProgressService

__all__ = ["ProgressService"]
