"""Structured incident tracking for batch parse runs.

Classifier failures (unknown merchant, missing amount) are ordinary result
values and never pass through here. This module covers the other case: an
unexpected exception escaping the parse of a single email during a batch
run. The incident is classified, logged with context, and the batch moves
on to the next email.

Usage:
    from subtrack.error_tracking import ParseIncident, ParseStage

    try:
        result = parse_subscription_email(...)
    except Exception as e:
        incident = ParseIncident.from_exception(
            e, ParseStage.PARSE, context={'message_id': msg_id}
        )
        incident.log()
"""

import traceback
from enum import Enum
from typing import Any

from subtrack.logging_config import get_logger

logger = get_logger(__name__)


class ParseStage(Enum):
    """Where in the parse workflow the incident occurred."""

    PREPARE = "prepare"  # Input normalisation (HTML to text, etc.)
    PARSE = "parse"  # Classifier pipeline
    RECORD = "record"  # Building the parsed-email record


class ErrorType(Enum):
    """Incident classification for debugging."""

    PARSE_ERROR = "parse_error"  # Parsing/extraction failures
    VALIDATION = "validation"  # Data validation failures
    DECODE_ERROR = "decode_error"  # Undecodable input text
    UNKNOWN = "unknown"  # Uncategorized errors


class ParseIncident:
    """Structured incident with logging.

    Attributes:
        stage: Parse stage where the incident occurred
        error_type: Incident classification
        message: Human-readable error message
        exception: Original exception (if any)
        context: Additional context (message_id, sender, etc.)
        stack_trace: Full stack trace string
    """

    def __init__(
        self,
        stage: ParseStage,
        error_type: ErrorType,
        message: str,
        exception: Exception | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.stage = stage
        self.error_type = error_type
        self.message = message
        self.exception = exception
        self.context = context or {}
        self.stack_trace = None

        if exception:
            self.stack_trace = "".join(
                traceback.format_exception(
                    type(exception), exception, exception.__traceback__
                )
            )

    def log(self) -> None:
        """Log the incident through the structured logger."""
        logger.error(
            f"[{self.stage.value}] {self.message}",
            extra={
                "message_id": self.context.get("message_id"),
                "merchant": self.context.get("sender"),
                "parse_method": self.context.get("parse_method"),
            },
            exc_info=self.exception,
        )

    def to_dict(self) -> dict:
        """Serialise the incident for reporting."""
        return {
            "stage": self.stage.value,
            "error_type": self.error_type.value,
            "message": self.message,
            "context": dict(self.context),
            "stack_trace": self.stack_trace,
        }

    @classmethod
    def from_exception(
        cls,
        exception: Exception,
        stage: ParseStage,
        context: dict[str, Any] | None = None,
    ) -> "ParseIncident":
        """Auto-classify an incident from an exception.

        Args:
            exception: Exception object to classify
            stage: Stage where the exception occurred
            context: Additional context dict

        Returns:
            ParseIncident with an auto-classified error type
        """
        error_type = ErrorType.UNKNOWN
        error_str = str(exception).lower()

        if isinstance(exception, UnicodeError) or "decode" in error_str:
            error_type = ErrorType.DECODE_ERROR
        elif isinstance(exception, ValueError) or "invalid" in error_str:
            error_type = ErrorType.VALIDATION
        elif stage == ParseStage.PARSE:
            error_type = ErrorType.PARSE_ERROR

        return cls(
            stage=stage,
            error_type=error_type,
            message=str(exception) or type(exception).__name__,
            exception=exception,
            context=context,
        )
