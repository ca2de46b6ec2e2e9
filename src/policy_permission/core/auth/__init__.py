"""
Actors and decision oracles for permission checks.
"""

from .principal import Principal, PrincipalType, is_valid_actor
from .oracle import DecisionOracle, PermissionTableOracle, PolicyDecision

__all__ = [
    "Principal",
    "PrincipalType",
    "is_valid_actor",
    "DecisionOracle",
    "PermissionTableOracle",
    "PolicyDecision",
]
