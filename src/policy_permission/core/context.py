"""
Check Context

Tracks which capability a policy is currently resolving. A policy opens a
context when a top-level dispatch starts; proxy re-dispatch re-enters the
same context, and it is dropped when the top-level dispatch returns.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import MissingCallContextError


@dataclass
class CheckContext:
    """Per-call state owned by one policy instance"""
    invoked_capability: str                       # Name as originally called (may be an alias)
    resolved_capability: Optional[str] = None     # Name used for key derivation
    invoked_proxy_alias: Optional[str] = None     # Alias that matched a proxy entry
    proxy_name: Optional[str] = None              # Name combined by proxied checks
    chain: List[str] = field(default_factory=list)  # Aliases already proxied in this call
    depth: int = 0                                # Nested dispatches in flight

    @classmethod
    def start(cls, capability: str) -> "CheckContext":
        """Create a fresh context for a top-level call"""
        return cls(invoked_capability=capability, resolved_capability=capability)

    @property
    def is_nested(self) -> bool:
        """True while a re-entrant (proxied) dispatch is running"""
        return self.depth > 1

    def current_capability(self) -> str:
        """
        Return the capability name to derive keys from.

        Raises:
            MissingCallContextError: If it was already consumed by a check
        """
        if not self.resolved_capability:
            raise MissingCallContextError(
                f"Cannot get called capability (invoked as '{self.invoked_capability}')"
            )
        return self.resolved_capability
