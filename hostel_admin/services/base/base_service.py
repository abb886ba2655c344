"""
Base class for the hostel services.

Each service owns one primary repository plus the request's session. Public
methods wrap their work in ``transaction()`` and convert whatever escapes
into a ``ServiceResult`` through ``_handle_exception``.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_admin.core.exceptions import BaseAppException, ErrorCode
from hostel_admin.core.logging import get_logger
from hostel_admin.services.base.service_result import (
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo")


def _ref(entity_ref: Optional[Any]) -> Optional[str]:
    return str(entity_ref) if entity_ref is not None else None


class BaseService(ABC, Generic[TModel, TRepo]):
    """Session, primary repository, unit-of-work and failure mapping."""

    def __init__(self, repository: TRepo, db_session: Session):
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger("hostel_admin.services").bind(component=self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        One unit of work: commit when the block finishes, roll back and
        re-raise when it raises. Commit failures are rolled back too.

            with self.transaction():
                self.repository.create(entity, commit=False)
        """
        try:
            yield self.db
            self.db.commit()
        except Exception:
            try:
                self.db.rollback()
            except SQLAlchemyError as rollback_error:
                # The original error is the one callers need to see
                self._logger.warning(f"Rollback failed: {rollback_error}")
            raise

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
    ) -> ServiceResult:
        """
        Turn an exception raised during ``operation`` into a failed result.

        Domain exceptions keep their code and message. Constraint violations
        that slipped past the explicit checks (typically a concurrent writer)
        become CONFLICT. Anything else is logged with its traceback and
        reported as INTERNAL_ERROR.
        """
        context = {
            "operation": operation,
            "entity_ref": _ref(entity_ref),
            "exception_type": type(exception).__name__,
        }
        error = self._failure_for(exception, operation, context["entity_ref"])

        if error.severity is ErrorSeverity.CRITICAL:
            self._logger.error(f"{operation} failed: {exception}", exc_info=True, extra=context)
        else:
            self._logger.warning(
                f"{operation} rejected: {error.message}",
                extra={**context, "error_code": error.code.value},
            )
        return ServiceResult.failure(error)

    @staticmethod
    def _failure_for(exception: Exception, operation: str, entity_ref: Optional[str]) -> ServiceError:
        if isinstance(exception, BaseAppException):
            return ServiceResult.from_app_exception(exception).error

        if isinstance(exception, IntegrityError):
            return ServiceError(
                code=ErrorCode.CONFLICT,
                message=f"Failed to {operation}: conflicting concurrent change",
                details={"entity_ref": entity_ref, "constraint": str(exception.orig)},
            )

        return ServiceError(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Failed to {operation}",
            severity=ErrorSeverity.CRITICAL,
            details={
                "error": str(exception),
                "entity_ref": entity_ref,
                "database": isinstance(exception, SQLAlchemyError),
            },
        )

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Info line for a committed mutation."""
        self._logger.info(operation, extra={"entity_ref": _ref(entity_ref), **(extra or {})})

    @staticmethod
    def _page_meta(page_info) -> Dict[str, Any]:
        return {"pagination": page_info.to_dict()}
