"""Shared-secret check for the admin area."""

import hmac

from loguru import logger

from src.core import config
from src.core.exceptions import AuthenticationError


def is_admin_password(password: str | None) -> bool:
    if not password:
        return False
    return hmac.compare_digest(password.encode(), config.ADMIN_PASSWORD.encode())


def verify_admin_password(password: str | None) -> None:
    """Raise AuthenticationError unless ``password`` is the admin password.

    There is no session: every admin request carries the password.
    """
    if not is_admin_password(password):
        logger.warning("Rejected admin request: invalid password")
        raise AuthenticationError
