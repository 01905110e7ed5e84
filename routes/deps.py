from dataclasses import dataclass, field
from typing import Dict, Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from config import Settings
from database import Database
from exceptions import ConfigurationError
from services import BlobService


@dataclass
class ApplicationDependencies:
    """Collaborators built once at startup and shared by every request.

    A collaborator whose credential is missing is left as ``None`` and the
    ConfigurationError raised while building it is kept in ``errors`` so the
    requests that need it can report it.
    """
    settings: Settings
    database: Optional[Database] = None
    blob_service: Optional[BlobService] = None
    errors: Dict[str, ConfigurationError] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationDependencies":
        deps = cls(settings=settings)
        try:
            deps.database = Database.from_settings(settings)
        except ConfigurationError as e:
            deps.errors["database"] = e
        try:
            deps.blob_service = BlobService.from_settings(settings)
        except ConfigurationError as e:
            deps.errors["blob"] = e
        return deps

    def require_database(self) -> Database:
        if self.database is None:
            raise self.errors.get("database") or ConfigurationError("POSTGRES_URL")
        return self.database

    def require_blob_service(self) -> BlobService:
        if self.blob_service is None:
            raise self.errors.get("blob") or ConfigurationError("BLOB_READ_WRITE_TOKEN")
        return self.blob_service


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_settings(deps: ApplicationDependencies = Depends(get_app_dependencies)) -> Settings:
    return deps.settings


def get_db(deps: ApplicationDependencies = Depends(get_app_dependencies)):
    """Session on the relational store, with the schema guaranteed to exist."""
    database = deps.require_database()
    database.ensure_schema()
    db: Session = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
