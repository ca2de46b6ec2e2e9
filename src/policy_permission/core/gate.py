"""
Gate

Maps resources to policies and routes capability checks to them:

    gate = Gate(oracle)

    @gate.policy(Article)
    class ArticlePolicy(MagicPolicy):
        pass

    gate.allows(user, "viewAny", Article)      # "view any articles"
    gate.authorize(user, "update", article)    # raises AuthorizationDenied
"""

import logging
from typing import Any, Callable, Dict, Optional, Type, Union

from ..config.schema import NamingRules
from .auth.oracle import DecisionOracle
from .errors import AuthorizationDenied, PolicyNotFoundError
from .policy import MagicPolicy

logger = logging.getLogger(__name__)

PolicyTarget = Union[MagicPolicy, Type[MagicPolicy], str, None]


class Gate:
    """Registry of policies keyed by resource type or name"""

    def __init__(self, oracle: DecisionOracle, rules: Optional[NamingRules] = None):
        self.oracle = oracle
        self.rules = rules or NamingRules()
        self._by_type: Dict[type, Type[MagicPolicy]] = {}
        self._by_name: Dict[str, Type[MagicPolicy]] = {}

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, resource_type: type, policy_cls: Type[MagicPolicy]) -> None:
        """Register the policy for a resource type"""
        self._by_type[resource_type] = policy_cls
        logger.debug(f"Registered {policy_cls.__name__} for {resource_type.__name__}")

    def register_named(self, name: str, policy_cls: Type[MagicPolicy]) -> None:
        """Register a policy under a name (for checks without a resource)"""
        self._by_name[name] = policy_cls
        logger.debug(f"Registered {policy_cls.__name__} as '{name}'")

    def policy(self, resource_type: type) -> Callable[[Type[MagicPolicy]], Type[MagicPolicy]]:
        """Class decorator form of register()"""
        def decorator(policy_cls: Type[MagicPolicy]) -> Type[MagicPolicy]:
            self.register(resource_type, policy_cls)
            return policy_cls
        return decorator

    # =========================================================================
    # Lookup
    # =========================================================================

    def policy_for(self, target: PolicyTarget) -> MagicPolicy:
        """
        Return the policy instance for a resource, resource type, policy
        class, policy instance or registered name.

        A policy instance is returned as is; otherwise a new instance is
        built, so no check sees state left by another.

        Raises:
            PolicyNotFoundError: If nothing is registered for the target
        """
        if isinstance(target, MagicPolicy):
            return target

        if isinstance(target, type) and issubclass(target, MagicPolicy):
            return self._instance(target)

        if isinstance(target, str):
            policy_cls = self._by_name.get(target)
        else:
            resource_type = target if isinstance(target, type) else type(target)
            policy_cls = next(
                (self._by_type[t] for t in resource_type.__mro__ if t in self._by_type),
                None,
            )

        if policy_cls is None:
            raise PolicyNotFoundError(f"No policy registered for {target!r}")

        return self._instance(policy_cls)

    def _instance(self, policy_cls: Type[MagicPolicy]) -> MagicPolicy:
        # New per lookup: the memoised subject depends on the resource checked
        return policy_cls(self.oracle, self.rules)

    # =========================================================================
    # Checks
    # =========================================================================

    def allows(
        self,
        actor: Any,
        capability: str,
        resource: Any = None,
        policy: PolicyTarget = None,
    ) -> bool:
        """
        Check a capability for an actor.

        The policy is looked up from `policy` when given, else from the
        resource. Without an explicit policy, a resource class or name is
        only used for lookup ("viewAny" on Article) and is not passed on.

        Raises:
            InvalidActorError: If actor is not an authenticated Principal
            PolicyNotFoundError: If no policy matches
        """
        if policy is None:
            instance = self.policy_for(resource)
            if isinstance(resource, (type, str)):
                resource = None
        else:
            instance = self.policy_for(policy)

        return instance.dispatch(capability, actor, resource)

    def denies(self, actor: Any, capability: str, resource: Any = None, policy: PolicyTarget = None) -> bool:
        return not self.allows(actor, capability, resource, policy)

    def authorize(self, actor: Any, capability: str, resource: Any = None, policy: PolicyTarget = None) -> None:
        """
        Raise AuthorizationDenied unless the capability is allowed.
        """
        if not self.allows(actor, capability, resource, policy):
            raise AuthorizationDenied(capability)
