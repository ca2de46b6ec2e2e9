"""
Test inflection helpers (snake, plural)
"""

import pytest

from policy_permission.core.inflection import plural, pluralize_word, snake


class TestSnake:

    @pytest.mark.parametrize("value,delimiter,expected", [
        ("viewAny", " ", "view any"),
        ("SuperUser", " ", "super user"),
        ("SuperUser", "_", "super_user"),
        ("BlogArticle", "-", "blog-article"),
        ("update", " ", "update"),
        ("view any", "-", "view-any"),
        ("View Any", " ", "view any"),
    ])
    def test_snake(self, value, delimiter, expected):
        assert snake(value, delimiter) == expected


class TestPlural:

    @pytest.mark.parametrize("word,expected", [
        ("article", "articles"),
        ("user", "users"),
        ("category", "categories"),
        ("day", "days"),
        ("box", "boxes"),
        ("class", "classes"),
        ("status", "statuses"),
        ("knife", "knives"),
        ("analysis", "analyses"),
        ("medium", "media"),
        ("hero", "heroes"),
        ("person", "people"),
        ("child", "children"),
        ("news", "news"),
        ("articles", "articles"),
    ])
    def test_pluralize_word(self, word, expected):
        assert pluralize_word(word) == expected

    def test_matches_case(self):
        assert pluralize_word("Person") == "People"
        assert pluralize_word("USER") == "USERS"
        assert pluralize_word("Article") == "Articles"

    def test_pluralizes_trailing_word(self):
        assert plural("super user") == "super users"
        assert plural("blog-article") == "blog-articles"
        assert plural("sales person") == "sales people"

    def test_empty(self):
        assert plural("") == ""
        assert plural("blog-") == "blog-"

    def test_trailing_digit(self):
        assert plural("article2") == "article2s"
        assert plural("v2") == "v2s"
        assert plural("blog article2") == "blog article2s"
