"""Custom exceptions for FeedSift.

All exceptions inherit from FeedSiftError so callers can catch the whole
family at once. Each exception carries a context dictionary for structured
logging; use the `context` property to access the extra details.
"""

from typing import Any


class FeedSiftError(Exception):
    """Base exception for all FeedSift errors.

    Attributes:
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise FeedSiftError("Something went wrong", context={"source_id": "abc"})
        ... except FeedSiftError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize FeedSiftError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "FeedSiftError":
        """Add additional context to the exception.

        Args:
            **kwargs: Key-value pairs to add to context

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Configuration Errors
# ============================================


class ConfigError(FeedSiftError):
    """Base exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigError.

        Args:
            message: Error message
            config_path: Path to the config file/key
            context: Additional context
        """
        ctx = context or {}
        if config_path:
            ctx["config_path"] = config_path
        super().__init__(message, context=ctx)


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails.

    Supports two usage patterns:
    1. Simple: ConfigValidationError("error message")
    2. Structured: ConfigValidationError(field="weight", value=3, reason="out of range")

    Attributes:
        field: Field that failed validation (optional)
        value: Invalid value (optional)
        reason: Validation failure reason (optional)
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        value: Any = None,
        reason: str | None = None,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigValidationError.

        Args:
            message: Error message (for simple usage)
            field: Field that failed validation
            value: Invalid value
            reason: Validation failure reason
            config_path: Path to config file
            context: Additional context
        """
        ctx = context or {}

        self.field = field
        self.value = value
        self.reason = reason

        if field and reason:
            ctx.update({"field": field, "reason": reason})
            if value is not None:
                ctx["value"] = str(value)
            final_message = f"Config validation failed for '{field}': {reason}"
        elif message:
            final_message = message
        else:
            final_message = "Configuration validation failed"

        super().__init__(final_message, config_path=config_path, context=ctx)


class ConfigNotFoundError(ConfigError):
    """Raised when a required configuration is not found.

    Attributes:
        config_key: The configuration key that was not found
    """

    def __init__(
        self,
        config_key: str,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigNotFoundError.

        Args:
            config_key: Configuration key that was not found
            config_path: Path to config file
            context: Additional context
        """
        ctx = context or {}
        ctx["config_key"] = config_key
        super().__init__(
            f"Configuration '{config_key}' not found",
            config_path=config_path,
            context=ctx,
        )
        self.config_key = config_key


class SourceConfigError(ConfigValidationError):
    """Raised when the source configuration document has the wrong shape.

    Attributes:
        errors: Flattened validation error messages
    """

    def __init__(
        self,
        errors: list[str],
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SourceConfigError.

        Args:
            errors: Validation error messages
            config_path: Path to the store document
            context: Additional context
        """
        ctx = context or {}
        ctx["errors"] = errors[:10]
        self.errors = errors
        summary = "; ".join(errors[:3]) or "unknown error"
        super().__init__(
            f"Source configuration could not be parsed: {summary}",
            config_path=config_path,
            context=ctx,
        )


# ============================================
# Service Errors
# ============================================


class ServiceError(FeedSiftError):
    """Base exception for service-related errors."""

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ServiceError.

        Args:
            message: Error message
            service_name: Name of the service
            context: Additional context
        """
        ctx = context or {}
        if service_name:
            ctx["service_name"] = service_name
        super().__init__(message, context=ctx)


class CollectionError(ServiceError):
    """Raised when a feed supplier fails for one source.

    Attributes:
        source_id: Source that failed
    """

    def __init__(
        self,
        source_id: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize CollectionError.

        Args:
            source_id: Identifier of the failing source
            message: Error message
            context: Additional context
        """
        ctx = context or {}
        ctx["source_id"] = source_id
        self.source_id = source_id
        super().__init__(
            f"Collection failed for {source_id}: {message}",
            service_name="collector",
            context=ctx,
        )


class SummarizationError(ServiceError):
    """Raised when the external summarizer fails for an item.

    Attributes:
        item_id: Item that could not be summarized
    """

    def __init__(
        self,
        item_id: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SummarizationError.

        Args:
            item_id: Identifier of the item
            message: Error message
            context: Additional context
        """
        ctx = context or {}
        ctx["item_id"] = item_id
        self.item_id = item_id
        super().__init__(
            f"Summarization failed for {item_id}: {message}",
            service_name="summarizer",
            context=ctx,
        )


__all__ = [
    "FeedSiftError",
    "ConfigError",
    "ConfigValidationError",
    "ConfigNotFoundError",
    "SourceConfigError",
    "ServiceError",
    "CollectionError",
    "SummarizationError",
]
