"""
Magic Policy

Base class for policies whose checks are derived from method names.

Calling a method that a policy does not define resolves it into a
permission key lookup:

    class ArticlePolicy(MagicPolicy):
        pass

    ArticlePolicy(oracle).viewAny(user)          # checks "view any articles"

Proxies let one handler stand in for several checks:

    class ArticlePolicy(MagicPolicy):
        proxies = {"manage": ["update", "delete"]}

        def manage(self, actor, article=None):
            return self.evaluate(actor) or self.evaluate_proxied(actor, "own", article)

`update` and `delete` are routed to `manage`; `evaluate(actor)` checks
"update articles" and `evaluate_proxied` checks "update own articles".
With a "manage:false" entry both keys are built from "manage" instead.

A policy instance is not thread-safe: the call context and the memoised
subject are plain instance state. Use one instance per thread or serialise
access to it.
"""

import functools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from ..config.schema import NamingRules
from .auth.oracle import DecisionOracle
from .auth.principal import is_valid_actor
from .context import CheckContext
from .errors import InvalidActorError, InvalidSubjectError, MissingCallContextError
from .keys import (
    action_from_method_name,
    compose_key,
    get_proxied_action,
    subject_from_type_name,
)

logger = logging.getLogger(__name__)

ProxyTable = Dict[str, Union[str, List[str]]]


class MagicPolicy:
    """
    Resolve undefined capability checks into permission keys.

    Class attributes:
        permission_subject: Define it if the policy and resource names differ
        proxies: {"target" or "target:false": alias or [aliases]}
        policy_suffix: Stripped from the class name to derive the subject
    """

    permission_subject: Optional[str] = None
    proxies: ProxyTable = {}
    policy_suffix: str = "Policy"

    def __init__(self, oracle: DecisionOracle, rules: Optional[NamingRules] = None):
        self.oracle = oracle
        self.rules = rules or NamingRules()
        self._context: Optional[CheckContext] = None

    def __getattr__(self, name: str) -> Callable[..., bool]:
        # Only reached for attributes the policy does not define
        if name.startswith("_"):
            raise AttributeError(name)
        return functools.partial(self.handle_unresolved_capability, name)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def dispatch(self, capability: str, actor: Any, resource: Any = None) -> bool:
        """
        Route a capability check to its handler.

        Methods defined on the concrete policy are called directly (inside a
        call context naming the capability); anything else is resolved by
        handle_unresolved_capability.
        """
        handler = self._find_handler(capability)
        if handler is None:
            return self.handle_unresolved_capability(capability, actor, resource)

        self._ensure_actor(actor)
        with self._call_context(capability):
            if resource is None:
                return handler(actor)
            return handler(actor, resource)

    def handle_unresolved_capability(self, capability: str, actor: Any = None, resource: Any = None) -> bool:
        """
        Check a capability the policy does not define.

        Example:
            `viewAny` on PostPolicy checks the "view any posts" key.

        Raises:
            InvalidActorError: If actor is not an authenticated Principal
        """
        self._ensure_actor(actor)

        with self._call_context(capability) as context:
            if context.is_nested:
                context.resolved_capability = capability

            proxy = self.find_proxy_target(capability)
            if proxy is not None:
                target, keep_base_method_name = proxy

                if target in context.chain:
                    logger.warning(
                        f"{type(self).__name__}: proxy loop {' -> '.join(context.chain + [target])}, denying"
                    )
                    return False

                if not keep_base_method_name:
                    context.resolved_capability = target
                context.invoked_proxy_alias = capability
                context.proxy_name = capability if keep_base_method_name else target
                context.chain.append(capability)

                logger.debug(f"{type(self).__name__}: '{capability}' proxied to '{target}'")
                return self.dispatch(target, actor, resource)

            action = action_from_method_name(capability, self.rules)
            return self.evaluate(actor, action, resource)

    def find_proxy_target(self, capability: str) -> Optional[Tuple[str, bool]]:
        """
        Find the proxy entry whose aliases contain the capability.

        Returns:
            (target, keep_base_method_name) or None
        """
        for target_spec, aliases in (self.proxies or {}).items():
            if isinstance(aliases, str):
                aliases = [aliases]
            if capability in aliases:
                target, _, flag = target_spec.partition(":")
                return target, flag.strip().lower() != "false"
        return None

    # =========================================================================
    # Permission checks
    # =========================================================================

    def evaluate(self, actor: Any, action: Optional[str] = None, resource: Any = None) -> bool:
        """
        Check the actor's permission to an action on the policy's subject.

        Without an action, the action is derived from the called capability.
        Any failure while checking is a denial.
        """
        self._ensure_actor(actor)

        try:
            if not action:
                return self.evaluate_by_method_name(actor, resource)

            key = compose_key(self.resolve_subject(resource), action, self.rules)
            allowed = bool(self.oracle.check(actor, key))
            logger.debug(f"{type(self).__name__}: '{key}' -> {'allow' if allowed else 'deny'}")

            if self._context is not None:
                self._context.resolved_capability = None

            return allowed
        except Exception as e:
            logger.warning(f"{type(self).__name__}: permission check denied on error: {e!r}")
            return False

    def evaluate_by_method_name(self, actor: Any, resource: Any = None) -> bool:
        """
        Check the permission named after the called capability.

        The derived action ("view any") is checked, not the raw method name.
        """
        if self._context is None:
            raise MissingCallContextError("Cannot get called capability outside of a dispatch")

        action = action_from_method_name(self._context.current_capability(), self.rules)
        return self.evaluate(actor, action, resource)

    def evaluate_proxied(self, actor: Any, action: str, resource: Any = None) -> bool:
        """
        Check an action combined with the proxy alias that was called.

        "update" proxied to a handler checking "own" -> "update own <subject>".
        """
        self._ensure_actor(actor)

        try:
            called_proxy = self.called_proxy()
            if called_proxy is None:
                raise MissingCallContextError("Cannot get called proxy method")

            return self.evaluate(
                actor,
                get_proxied_action(called_proxy, action, self.rules),
                resource,
            )
        except Exception as e:
            logger.warning(f"{type(self).__name__}: proxied permission check denied on error: {e!r}")
            return False

    def called_proxy(self) -> Optional[str]:
        """Return the proxy name to combine actions with, if any"""
        # Set when the alias is routed, so earlier checks in the handler don't affect it
        context = self._context
        if context is None:
            return None
        return context.proxy_name

    # =========================================================================
    # Subject
    # =========================================================================

    def resolve_subject(self, resource: Any = None) -> str:
        """
        Return the subject name.

        A string resource is returned as is. Otherwise the subject comes
        from permission_subject, or is derived once from the resource type
        (or from the policy name when there is no resource) and memoised.

        Raises:
            InvalidSubjectError: If resource is a primitive value
        """
        if isinstance(resource, str):
            return resource

        if self.permission_subject:
            return self.permission_subject

        if resource is None:
            raw_name = self.subject_type_name()
        elif isinstance(resource, type):
            raw_name = resource.__name__
        elif type(resource).__module__ == "builtins":
            raise InvalidSubjectError(resource)
        else:
            raw_name = type(resource).__name__

        self.permission_subject = subject_from_type_name(raw_name, self.rules)
        return self.permission_subject

    def subject_type_name(self) -> str:
        """SuperUserPolicy -> SuperUser"""
        name = type(self).__name__
        suffix = self.policy_suffix
        if suffix and name.endswith(suffix) and name != suffix:
            return name[:-len(suffix)]
        return name

    # =========================================================================
    # Internals
    # =========================================================================

    @contextmanager
    def _call_context(self, capability: str) -> Iterator[CheckContext]:
        if self._context is None:
            self._context = CheckContext.start(capability)

        context = self._context
        context.depth += 1
        try:
            yield context
        finally:
            context.depth -= 1
            if context.depth == 0:
                self._context = None

    def _find_handler(self, capability: str) -> Optional[Callable[..., bool]]:
        # Only methods of concrete policies are handlers, never MagicPolicy's own
        for cls in type(self).__mro__:
            if cls is MagicPolicy:
                break
            if callable(cls.__dict__.get(capability)):
                return getattr(self, capability)
        return None

    @staticmethod
    def _ensure_actor(actor: Any) -> None:
        if not is_valid_actor(actor):
            raise InvalidActorError(actor)
