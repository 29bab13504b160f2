"""
Base Service
Shared logging, validation and error translation for services
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.config import Config, get_config
from src.services.exceptions import (
    AuthenticationError,
    DatabaseError,
    ServiceError,
)


class BaseService:
    """
    Base class for request-scoped services

    A service is bound to one AsyncSession for the lifetime of one request.
    """

    def __init__(self, session: AsyncSession, config: Optional[Config] = None):
        self.session = session
        self.config = config or get_config()
        self.logger = logging.getLogger(f"src.services.{self.get_service_name()}")

    def get_service_name(self) -> str:
        return "base"

    # ========================================================================
    # Logging helpers
    # ========================================================================

    def log_info(self, message: str) -> None:
        self.logger.info(f"[{self.get_service_name()}] {message}")

    def log_debug(self, message: str) -> None:
        self.logger.debug(f"[{self.get_service_name()}] {message}")

    def log_error(self, message: str, error: Optional[BaseException] = None) -> None:
        if error is not None:
            self.logger.error(f"[{self.get_service_name()}] {message}: {error}")
        else:
            self.logger.error(f"[{self.get_service_name()}] {message}")

    # ========================================================================
    # Caller checks
    # ========================================================================

    @staticmethod
    def require_user(user: Any) -> Any:
        """Reject anonymous callers"""
        if user is None:
            raise AuthenticationError()
        return user

    # ========================================================================
    # Error translation
    # ========================================================================

    def handle_error(
        self,
        error: Exception,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> Exception:
        """
        Translate an exception for the caller to raise

        ServiceErrors pass through unchanged; database failures become
        DatabaseError. Anything else is returned as is.
        """
        if isinstance(error, ServiceError):
            return error

        self.log_error(f"{operation} failed (context={context or {}})", error=error)

        if isinstance(error, SQLAlchemyError):
            return DatabaseError("Database error", operation=operation)

        return error
