"""Custom exceptions for the application."""

class ApplicationError(Exception):
    """Base application error."""
    pass

class ConfigError(ApplicationError):
    """Configuration-related errors."""
    pass

class AnnotationError(ApplicationError):
    """Annotation document is not in a shape the parser understands."""
    pass

class DetectorUnavailableError(ApplicationError):
    """Upstream detector call failed; callers fall back to the mock path."""
    pass
