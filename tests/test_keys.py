"""
Test Permission Key Derivation

compose_key, subject_from_type_name, action_from_method_name, get_proxied_action.
"""

from policy_permission.config.schema import NamingRules
from policy_permission.core.keys import (
    action_from_method_name,
    compose_key,
    get_proxied_action,
    subject_from_type_name,
)


class TestComposeKey:
    """Key pattern substitution"""

    def test_default_rules(self, rules):
        assert compose_key("articles", "view-any", rules) == "view-any articles"

    def test_dot_delimiter(self):
        rules = NamingRules(delimiter_between_subject_and_action=".")
        assert compose_key("articles", "view-any", rules) == "view-any.articles"

    def test_subject_first_pattern(self):
        rules = NamingRules(key_pattern="{subject}{delimiter}{action}", delimiter_between_subject_and_action=".")
        assert compose_key("articles", "view-any", rules) == "articles.view-any"

    def test_missing_placeholder_omits_segment(self):
        """A pattern without {delimiter} or {subject} still produces a key"""
        assert compose_key("articles", "view", NamingRules(key_pattern="{action}:{subject}")) == "view:articles"
        assert compose_key("articles", "view", NamingRules(key_pattern="{action}")) == "view"

    def test_no_double_substitution(self, rules):
        """Placeholder text inside a value is not substituted again"""
        assert compose_key("{action}", "view", rules) == "view {action}"
        assert compose_key("articles", "{subject}", rules) == "{subject} articles"

    def test_pure(self, rules):
        first = compose_key("articles", "view any", rules)
        second = compose_key("articles", "view any", rules)
        assert first == second == "view any articles"


class TestSubjectFromTypeName:
    """Type name -> subject"""

    def test_snake_and_plural(self, rules):
        assert subject_from_type_name("SuperUser", rules) == "super users"

    def test_word_delimiter(self):
        rules = NamingRules(delimiter_between_words="-")
        assert subject_from_type_name("BlogArticle", rules) == "blog-articles"

    def test_lower_case_without_snake(self):
        rules = NamingRules(subject_snake_case=False)
        assert subject_from_type_name("SuperUser", rules) == "superusers"

    def test_all_transformations_off(self):
        rules = NamingRules(subject_snake_case=False, subject_lower_case=False, subject_plural=False)
        assert subject_from_type_name("SuperUser", rules) == "SuperUser"

    def test_trailing_digit(self, rules):
        assert subject_from_type_name("Article2", rules) == "article2s"

    def test_singular(self):
        rules = NamingRules(subject_plural=False)
        assert subject_from_type_name("Category", rules) == "category"

    def test_irregular_plural(self, rules):
        assert subject_from_type_name("Person", rules) == "people"
        assert subject_from_type_name("Category", rules) == "categories"


class TestActionFromMethodName:
    """Method name -> action"""

    def test_snake_case(self, rules):
        assert action_from_method_name("viewAny", rules) == "view any"

    def test_snake_case_with_delimiter(self):
        rules = NamingRules(delimiter_between_words="-")
        assert action_from_method_name("viewAny", rules) == "view-any"
        assert action_from_method_name("forceDelete", rules) == "force-delete"

    def test_single_word_unchanged(self, rules):
        assert action_from_method_name("update", rules) == "update"

    def test_lower_case_without_snake(self):
        rules = NamingRules(action_snake_case=False)
        assert action_from_method_name("viewAny", rules) == "viewany"

    def test_unmodified(self):
        rules = NamingRules(action_snake_case=False, action_lower_case=False)
        assert action_from_method_name("viewAny", rules) == "viewAny"


class TestGetProxiedAction:
    """Proxy name combined with an action"""

    def test_paste_after(self, rules):
        assert get_proxied_action("manage", "own", rules) == "manage own"

    def test_paste_before(self):
        rules = NamingRules(proxied_action_paste_after=False)
        assert get_proxied_action("manage", "own", rules) == "own manage"

    def test_proxy_name_is_snake_cased(self):
        rules = NamingRules(delimiter_between_words="-")
        assert get_proxied_action("forceDelete", "own", rules) == "force-delete-own"


class TestEndToEndKeys:
    """Whole derivations with non-default rules"""

    def test_subject_dot_action(self):
        rules = NamingRules(key_pattern="{subject}.{action}", delimiter_between_words="-")

        subject = subject_from_type_name("BlogArticle", rules)
        action = action_from_method_name("viewAny", rules)

        assert subject == "blog-articles"
        assert action == "view-any"
        assert compose_key(subject, action, rules) == "blog-articles.view-any"
