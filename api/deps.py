import os
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from db.engine import get_session_factory

SESSION_HEADER = os.getenv("SESSION_HEADER", "X-Session-Id")


def get_db() -> Generator[Session, None, None]:
    db = get_session_factory()()  # Create a new database session
    try:
        yield db  # Yield the session to be used in the request
    finally:
        db.close()  # Ensure the session is closed after the request is done


def get_session_id(request: Request) -> Optional[str]:
    """Current viewer identity, as supplied by the host page."""
    value = request.headers.get(SESSION_HEADER)
    if value is None or not value.strip():
        return None
    return value.strip()
