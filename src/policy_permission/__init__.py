"""
Policy Permission Check

Derives permission keys ("view any articles") from policy method calls
("viewAny" on ArticlePolicy) and checks them against a decision oracle.
"""

from .config import NamingRules, load_naming_rules
from .core import (
    Gate,
    MagicPolicy,
    AuthorizationDenied,
    InvalidActorError,
    InvalidSubjectError,
    MissingCallContextError,
    PolicyNotFoundError,
)
from .core.auth import Principal, PrincipalType, PermissionTableOracle, DecisionOracle

__version__ = "0.1.0"

__all__ = [
    "NamingRules",
    "load_naming_rules",
    "Gate",
    "MagicPolicy",
    "AuthorizationDenied",
    "InvalidActorError",
    "InvalidSubjectError",
    "MissingCallContextError",
    "PolicyNotFoundError",
    "Principal",
    "PrincipalType",
    "PermissionTableOracle",
    "DecisionOracle",
]
