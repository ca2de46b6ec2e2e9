"""
Policy Permission Core

Permission key derivation and method-name driven policies.
"""

from .context import CheckContext
from .errors import (
    PermissionCheckError,
    InvalidActorError,
    InvalidSubjectError,
    MissingCallContextError,
    PolicyNotFoundError,
    AuthorizationDenied,
)
from .keys import compose_key, subject_from_type_name, action_from_method_name, get_proxied_action
from .policy import MagicPolicy
from .gate import Gate

__all__ = [
    "CheckContext",
    # Errors
    "PermissionCheckError",
    "InvalidActorError",
    "InvalidSubjectError",
    "MissingCallContextError",
    "PolicyNotFoundError",
    "AuthorizationDenied",
    # Keys
    "compose_key",
    "subject_from_type_name",
    "action_from_method_name",
    "get_proxied_action",
    # Policies
    "MagicPolicy",
    "Gate",
]
