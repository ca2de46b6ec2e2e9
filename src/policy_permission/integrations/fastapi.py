"""
FastAPI Integration

Endpoint-level enforcement of gate checks:

    require_update = require_capability(gate, "update", get_current_user, get_article)

    @app.put("/articles/{article_id}")
    async def update_article(user: Principal = Depends(require_update)):
        ...

Denied checks become 403, unauthenticated actors become 401.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from fastapi import Depends, HTTPException, status

from ..core.auth.principal import Principal
from ..core.errors import AuthorizationDenied, InvalidActorError
from ..core.gate import Gate, PolicyTarget

logger = logging.getLogger(__name__)


async def _no_resource() -> None:
    return None


def require_capability(
    gate: Gate,
    capability: str,
    get_actor: Callable[..., Any],
    get_resource: Optional[Callable[..., Any]] = None,
    policy: PolicyTarget = None,
) -> Callable[..., Awaitable[Principal]]:
    """
    Create a dependency that authorizes a capability.

    Args:
        gate: Gate holding the policies
        capability: Capability name, e.g. "viewAny" or "update"
        get_actor: Dependency returning the current Principal
        get_resource: Optional dependency returning the resource checked
        policy: Explicit policy (class, instance or registered name)

    Returns:
        Dependency returning the authorized actor
    """

    # async so checks run on the event loop, never concurrently on one policy
    async def dependency(
        actor: Any = Depends(get_actor),
        resource: Any = Depends(get_resource or _no_resource),
    ) -> Principal:
        try:
            gate.authorize(actor, capability, resource, policy)
        except InvalidActorError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        except AuthorizationDenied as e:
            logger.info(f"Denied '{capability}' for {getattr(actor, 'principal_id', actor)}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
        return actor

    return dependency
