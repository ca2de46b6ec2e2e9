"""
Decision Oracle

The oracle answers "may this actor do <permission key>". Policies only
depend on the DecisionOracle protocol; PermissionTableOracle is a
reference implementation backed by role and principal permission tables.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Optional, Protocol, Set, runtime_checkable

from .principal import Principal, PrincipalType

logger = logging.getLogger(__name__)


class PolicyDecision(str, Enum):
    """Authorization decision"""
    ALLOW = "allow"
    DENY = "deny"


@runtime_checkable
class DecisionOracle(Protocol):
    """Anything that can decide a permission key for an actor"""

    def check(self, actor: Principal, permission_key: str) -> bool:
        ...


class PermissionTableOracle:
    """
    Decide permission keys from role and principal grants.

    Decision order (first match wins):
    1. System principal -> allow
    2. Inactive or anonymous principal -> deny
    3. "*" or the key granted to the principal -> allow
    4. "*" or the key granted to the principal's role -> allow
    5. Default deny
    """

    def __init__(self, role_permissions: Optional[Dict[str, Iterable[str]]] = None):
        self.role_permissions: Dict[str, Set[str]] = {}
        for role, keys in (role_permissions or {}).items():
            self.grant_role(role, *keys)

    def grant_role(self, role: str, *keys: str) -> None:
        """Grant permission keys to a role"""
        self.role_permissions.setdefault(role, set()).update(keys)

    def revoke_role(self, role: str, *keys: str) -> None:
        """Revoke permission keys from a role"""
        self.role_permissions.get(role, set()).difference_update(keys)

    def decide(self, actor: Principal, permission_key: str) -> tuple[PolicyDecision, str]:
        """
        Make a decision for a permission key.

        Returns:
            (decision, reason) tuple
        """
        if actor.principal_type == PrincipalType.SYSTEM:
            return (PolicyDecision.ALLOW, "System principal")

        if not actor.is_authenticated:
            return (PolicyDecision.DENY, "Principal is not authenticated")

        if actor.has_permission(permission_key):
            return (PolicyDecision.ALLOW, "Granted to principal")

        role_keys = self.role_permissions.get(actor.role, set())
        if "*" in role_keys or permission_key in role_keys:
            return (PolicyDecision.ALLOW, f"Granted to role {actor.role}")

        return (PolicyDecision.DENY, "No grant matched")

    def check(self, actor: Principal, permission_key: str) -> bool:
        decision, reason = self.decide(actor, permission_key)
        if decision == PolicyDecision.ALLOW:
            logger.debug(f"Permission ALLOW: '{permission_key}' for {actor.principal_id} - {reason}")
        else:
            logger.info(f"Permission DENY: '{permission_key}' for {actor.principal_id} - {reason}")
        return decision == PolicyDecision.ALLOW
