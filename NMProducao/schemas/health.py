# schemas/health.py
from typing import List, Optional

from pydantic import BaseModel


class HealthOut(BaseModel):
    status: str
    app: str
    db: str


class VersionOut(BaseModel):
    app: str
    version: str


class DebugEnvironment(BaseModel):
    """Só metadados não sensíveis: nunca a URL do banco."""
    ENVIRONMENT: str
    PORT: int
    HAS_DATABASE_URL: bool
    CORS_CONFIGURED: bool
    CORS_ORIGINS: List[str]


class DebugOut(BaseModel):
    message: str
    timestamp: str
    headers: dict[str, Optional[str]]
    environment: DebugEnvironment
