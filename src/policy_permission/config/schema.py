"""
Permission Naming Rules Schema

Defines the naming rules that turn policy method calls into permission keys.
All rules can be specified via permission.yaml or programmatic defaults.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

PLACEHOLDERS = ("{action}", "{delimiter}", "{subject}")

DEFAULT_KEY_PATTERN = "{action}{delimiter}{subject}"


@dataclass(frozen=True)
class NamingRules:
    """
    Naming rules for permission keys.

    Key pattern examples:
        '{action}{delimiter}{subject}' -> view-any.articles
        '{subject}{delimiter}{action}' -> articles.view-any

    Delimiter examples:
        between_words ' '                -> view any blog articles
        between_words '-'                -> view-any blog-articles
        between_subject_and_action '.'   -> view-any.blog-articles

    Example permission.yaml:
    ```yaml
    naming_rules:
      key_pattern: "{subject}.{action}"
      delimiters:
        between_words: "-"
        between_subject_and_action: "."
      subject_snake_case: true
      subject_plural: true
      action_snake_case: true

    proxied_action_paste_after: true
    ```
    """
    key_pattern: str = DEFAULT_KEY_PATTERN
    delimiter_between_words: str = " "
    delimiter_between_subject_and_action: str = " "

    # Subject: SuperUser -> super user -> super users
    subject_snake_case: bool = True
    subject_lower_case: bool = True   # Used only when snake case is off
    subject_plural: bool = True

    # Action: viewAny -> view any
    action_snake_case: bool = True
    action_lower_case: bool = True    # Used only when snake case is off

    # manage + own -> "manage own" (True) or "own manage" (False)
    proxied_action_paste_after: bool = True

    def missing_placeholders(self) -> List[str]:
        """Placeholders that do not appear in the key pattern"""
        return [p for p in PLACEHOLDERS if p not in self.key_pattern]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NamingRules":
        """
        Create NamingRules from a dictionary (e.g., parsed YAML).

        Accepts either a whole permission document with a ``naming_rules``
        section, or the section itself.
        """
        data = data or {}
        rules_data = data.get("naming_rules", data)
        delimiters = rules_data.get("delimiters", {}) or {}

        # proxied_action_paste_after historically lives next to naming_rules
        paste_after = rules_data.get(
            "proxied_action_paste_after",
            data.get("proxied_action_paste_after", True),
        )

        rules = cls(
            key_pattern=rules_data.get("key_pattern", DEFAULT_KEY_PATTERN),
            delimiter_between_words=delimiters.get("between_words", " "),
            delimiter_between_subject_and_action=delimiters.get("between_subject_and_action", " "),
            subject_snake_case=bool(rules_data.get("subject_snake_case", True)),
            subject_lower_case=bool(rules_data.get("subject_lower_case", True)),
            subject_plural=bool(rules_data.get("subject_plural", True)),
            action_snake_case=bool(rules_data.get("action_snake_case", True)),
            action_lower_case=bool(rules_data.get("action_lower_case", True)),
            proxied_action_paste_after=bool(paste_after),
        )

        for placeholder in rules.missing_placeholders():
            logger.warning(
                f"Key pattern '{rules.key_pattern}' has no {placeholder} placeholder; "
                f"that segment will be omitted from permission keys"
            )

        return rules

    def to_dict(self) -> Dict[str, Any]:
        """Convert rules to dictionary (for serialization)"""
        return {
            "naming_rules": {
                "key_pattern": self.key_pattern,
                "delimiters": {
                    "between_words": self.delimiter_between_words,
                    "between_subject_and_action": self.delimiter_between_subject_and_action,
                },
                "subject_snake_case": self.subject_snake_case,
                "subject_lower_case": self.subject_lower_case,
                "subject_plural": self.subject_plural,
                "action_snake_case": self.action_snake_case,
                "action_lower_case": self.action_lower_case,
            },
            "proxied_action_paste_after": self.proxied_action_paste_after,
        }
