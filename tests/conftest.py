"""Shared fixtures for policy permission tests."""

import pytest

from policy_permission.config.schema import NamingRules
from policy_permission.core.auth.principal import Principal, PrincipalType


class RecordingOracle:
    """Oracle that records every key it is asked about"""

    def __init__(self, allowed=None, allow_all=False, error=None):
        self.allowed = set(allowed or [])
        self.allow_all = allow_all
        self.error = error
        self.calls = []

    @property
    def keys(self):
        return [key for _, key in self.calls]

    def check(self, actor, permission_key):
        self.calls.append((actor, permission_key))
        if self.error is not None:
            raise self.error
        return self.allow_all or permission_key in self.allowed


@pytest.fixture
def rules():
    return NamingRules()


@pytest.fixture
def actor():
    return Principal(principal_id="alice", role="editor", principal_type=PrincipalType.HUMAN)


@pytest.fixture
def oracle():
    return RecordingOracle(allow_all=True)


@pytest.fixture
def make_oracle():
    return RecordingOracle
