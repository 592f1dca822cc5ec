# teamcore/core/exceptions.py


class BaseAppException(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str = "App exception"):
        super().__init__(message)

# ==== Validation ====

class ValidationError(BaseAppException):
    """Field-level rule violation. Raised before any state is mutated."""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message)

class InvariantViolation(BaseAppException):
    """The requested change would break a team-level invariant."""
    def __init__(self, message: str = "Invariant violation"):
        super().__init__(message)

class ProvisioningExhausted(BaseAppException):
    """Subdomain allocation ran out of attempts."""
    def __init__(self, message: str = "Could not provision a subdomain"):
        super().__init__(message)

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Resource not found."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)

class TeamNotFound(NotFoundError):
    def __init__(self, message: str = "Team not found"):
        super().__init__(message)

# ==== Persistence ====

class TeamError(BaseAppException):
    """Team persistence error."""
    def __init__(self, message: str = "Team error"):
        super().__init__(message)

class UserError(BaseAppException):
    def __init__(self, message: str = "User error"):
        super().__init__(message)

class CollectionError(BaseAppException):
    def __init__(self, message: str = "Collection error"):
        super().__init__(message)

class DocumentError(BaseAppException):
    def __init__(self, message: str = "Document error"):
        super().__init__(message)

# ==== Onboarding / storage ====

class OnboardingTemplateError(BaseAppException):
    """An onboarding template could not be read."""
    def __init__(self, message: str = "Onboarding template unreadable"):
        super().__init__(message)

class StorageError(BaseAppException):
    """Object storage or remote fetch failed."""
    def __init__(self, message: str = "Storage error"):
        super().__init__(message)
