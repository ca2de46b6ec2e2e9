"""
Permission Configuration Module

Provides the naming rules used to derive permission keys from policy calls.
"""

from .schema import NamingRules
from .loader import load_naming_rules, load_naming_rules_from_file, create_default_config

__all__ = [
    "NamingRules",
    "load_naming_rules",
    "load_naming_rules_from_file",
    "create_default_config",
]
