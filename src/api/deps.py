from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Header
from loguru import logger
from sqlmodel import Session

from src.core.db import engine
from src.services.auth_service import verify_admin_password


def get_session() -> Generator[Session, None, None]:
    """Provide a database session for dependency injection."""
    logger.debug("Creating database session")
    with Session(engine) as session:
        yield session
    logger.debug("Database session closed")


def require_admin(
    x_admin_password: Annotated[str | None, Header()] = None,
) -> None:
    """Guard admin routes with the shared password header."""
    verify_admin_password(x_admin_password)


SessionDep = Annotated[Session, Depends(get_session)]
AdminDep = Depends(require_admin)
