"""
Permission Key Derivation

Pure functions that turn (subject, action) pairs into permission keys:

    compose_key("articles", "view any", rules)      -> "view any articles"
    subject_from_type_name("SuperUser", rules)      -> "super users"
    action_from_method_name("viewAny", rules)       -> "view any"
    get_proxied_action("manage", "own", rules)      -> "manage own"

All behaviour is governed by NamingRules; nothing here reads global state.
"""

import re

from ..config.schema import NamingRules
from .inflection import snake, plural

_PLACEHOLDER = re.compile(r'\{(action|delimiter|subject)\}')


def compose_key(subject: str, action: str, rules: NamingRules) -> str:
    """
    Build a permission key from the rules' key pattern.

    Placeholders are substituted in a single pass, so a subject or action
    that itself contains "{subject}" is never substituted twice. A pattern
    missing a placeholder simply omits that segment.
    """
    values = {
        "action": action,
        "delimiter": rules.delimiter_between_subject_and_action,
        "subject": subject,
    }
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], rules.key_pattern)


def subject_from_type_name(raw_name: str, rules: NamingRules) -> str:
    """
    Format a subject name from a type name.

    SuperUser -> super user -> super users
    """
    subject = raw_name

    if rules.subject_snake_case:
        subject = snake(subject, rules.delimiter_between_words)
    elif rules.subject_lower_case:
        subject = subject.lower()

    if rules.subject_plural:
        subject = plural(subject)

    return subject


def action_from_method_name(method: str, rules: NamingRules) -> str:
    """Derive an action name from a policy method name (viewAny -> view any)"""
    if rules.action_snake_case:
        return snake(method, rules.delimiter_between_words)

    if rules.action_lower_case:
        return method.lower()

    return method


def get_proxied_action(proxy_method_name: str, action: str, rules: NamingRules) -> str:
    """
    Combine a proxy method name with an action.

    With paste-after on: ("manage", "own") -> "manage own", else "own manage".
    """
    proxy_action = action_from_method_name(proxy_method_name, rules)
    delimiter = rules.delimiter_between_words

    if rules.proxied_action_paste_after:
        return f"{proxy_action}{delimiter}{action}"
    return f"{action}{delimiter}{proxy_action}"
