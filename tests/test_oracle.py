"""
Test Principal and PermissionTableOracle
"""

from policy_permission.core.auth.oracle import DecisionOracle, PermissionTableOracle, PolicyDecision
from policy_permission.core.auth.principal import Principal, PrincipalType, is_valid_actor


class TestPrincipal:

    def test_authenticated(self):
        assert Principal("alice").is_authenticated
        assert not Principal("alice", is_active=False).is_authenticated
        assert not Principal.anonymous_principal().is_authenticated
        assert Principal.system_principal().is_authenticated

    def test_is_valid_actor(self):
        assert is_valid_actor(Principal("alice"))
        assert not is_valid_actor(Principal.anonymous_principal())
        assert not is_valid_actor({"principal_id": "alice"})

    def test_has_permission(self):
        editor = Principal("alice", permissions=["update articles"])
        admin = Principal("root", permissions=["*"])

        assert editor.has_permission("update articles")
        assert not editor.has_permission("delete articles")
        assert admin.has_permission("delete articles")

    def test_serialization(self):
        principal = Principal("alice", role="editor", permissions=["view any articles"])
        restored = Principal.from_dict(principal.to_dict())

        assert restored == principal
        assert restored.principal_type == PrincipalType.HUMAN


class TestPermissionTableOracle:
    """Reference decision oracle"""

    def setup_method(self):
        self.oracle = PermissionTableOracle({
            "editor": ["view any articles", "update articles"],
            "admin": ["*"],
        })

    def test_is_decision_oracle(self):
        assert isinstance(self.oracle, DecisionOracle)

    def test_role_grant(self):
        editor = Principal("alice", role="editor")

        assert self.oracle.check(editor, "update articles") is True
        assert self.oracle.check(editor, "delete articles") is False

    def test_principal_grant(self):
        member = Principal("bob", role="member", permissions=["delete own articles"])

        assert self.oracle.check(member, "delete own articles") is True
        assert self.oracle.check(member, "view any articles") is False

    def test_wildcard_role(self):
        assert self.oracle.check(Principal("root", role="admin"), "anything at all") is True

    def test_system_principal(self):
        decision, reason = self.oracle.decide(Principal.system_principal(), "delete articles")

        assert decision == PolicyDecision.ALLOW
        assert "System" in reason

    def test_anonymous_and_inactive_denied(self):
        anonymous = Principal.anonymous_principal()
        inactive = Principal("carol", role="admin", is_active=False)

        assert self.oracle.check(anonymous, "view any articles") is False
        assert self.oracle.check(inactive, "view any articles") is False

    def test_grant_and_revoke(self):
        editor = Principal("alice", role="editor")

        self.oracle.grant_role("editor", "delete articles")
        assert self.oracle.check(editor, "delete articles") is True

        self.oracle.revoke_role("editor", "delete articles")
        assert self.oracle.check(editor, "delete articles") is False

    def test_unknown_role(self):
        assert self.oracle.check(Principal("dave", role="ghost"), "view any articles") is False
