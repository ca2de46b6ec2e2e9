"""
Permission Check Errors

Only InvalidActorError (and the gate-level errors) reach the caller.
Everything raised while evaluating a permission is turned into a denial.
"""


class PermissionCheckError(Exception):
    """Base class for permission check errors"""


class InvalidActorError(PermissionCheckError, TypeError):
    """The actor is not an authenticated principal"""

    def __init__(self, actor=None):
        self.actor = actor
        super().__init__(f"Bad actor: expected an authenticated Principal, got {type(actor).__name__}")


class InvalidSubjectError(PermissionCheckError, ValueError):
    """The permission subject is neither a string nor a domain object"""

    def __init__(self, subject=None):
        self.subject = subject
        super().__init__(f"Bad permission subject: {type(subject).__name__}")


class MissingCallContextError(PermissionCheckError, RuntimeError):
    """No capability name is available for the current check"""


class PolicyNotFoundError(PermissionCheckError, LookupError):
    """No policy is registered for a resource"""


class AuthorizationDenied(PermissionCheckError):
    """Raised by Gate.authorize when a check is denied"""

    def __init__(self, capability: str):
        self.capability = capability
        super().__init__(f"Missing permission: {capability}")
