"""
Principal Identity Model

The actor of every permission check:
- Principal: identity with a role and directly granted permission keys
- PrincipalType: kind of identity (human, service, system, anonymous)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any, List


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PrincipalType(str, Enum):
    """Type of principal"""
    HUMAN = "human"          # Human user
    SERVICE = "service"      # Service account
    SYSTEM = "system"        # System/internal principal
    ANONYMOUS = "anonymous"  # Unauthenticated


@dataclass
class Principal:
    """
    Authenticated identity asking for permission.

    Permissions are permission keys as produced by the naming rules,
    e.g. "view any articles". "*" grants everything.
    """
    principal_id: str
    role: str = "member"
    principal_type: PrincipalType = PrincipalType.HUMAN
    display_name: Optional[str] = None
    permissions: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def is_authenticated(self) -> bool:
        """Anonymous and deactivated principals are not authenticated"""
        return self.is_active and self.principal_type != PrincipalType.ANONYMOUS

    def has_permission(self, permission: str) -> bool:
        """Check if the principal holds a permission key directly"""
        return permission in self.permissions or "*" in self.permissions

    @classmethod
    def system_principal(cls) -> "Principal":
        """Create the system principal (for internal operations)"""
        return cls(
            principal_id="system",
            role="system",
            principal_type=PrincipalType.SYSTEM,
            display_name="System",
        )

    @classmethod
    def anonymous_principal(cls) -> "Principal":
        """Create an anonymous principal (unauthenticated)"""
        return cls(
            principal_id="anonymous",
            role="anonymous",
            principal_type=PrincipalType.ANONYMOUS,
            display_name="Anonymous",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        return {
            "principal_id": self.principal_id,
            "role": self.role,
            "principal_type": self.principal_type.value,
            "display_name": self.display_name,
            "permissions": list(self.permissions),
            "metadata": self.metadata,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Principal":
        """Deserialize from dictionary"""
        return cls(
            principal_id=data["principal_id"],
            role=data.get("role", "member"),
            principal_type=PrincipalType(data.get("principal_type", "human")),
            display_name=data.get("display_name"),
            permissions=list(data.get("permissions", [])),
            metadata=data.get("metadata", {}),
            is_active=data.get("is_active", True),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else _utcnow(),
        )


def is_valid_actor(actor: Any) -> bool:
    """An actor must be an authenticated Principal"""
    return isinstance(actor, Principal) and actor.is_authenticated
