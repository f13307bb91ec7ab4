"""FastAPI dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from therapist_finder.infrastructure.database.connection import get_session_factory
from therapist_finder.infrastructure.database.repository import TherapistRepository
from therapist_finder.services.directory_service import DirectoryService


def get_directory_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> DirectoryService:
    """Build a request-scoped directory service."""
    return DirectoryService(TherapistRepository(session_factory))
