"""Service layer.

Provides the application services behind the HTTP routes.
"""

from therapist_finder.services.directory_service import DirectoryService, TherapistPage

__all__ = [
    "DirectoryService",
    "TherapistPage",
]
