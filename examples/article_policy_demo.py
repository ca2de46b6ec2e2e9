"""
Demo of method-name driven policies

Shows how policy calls turn into permission keys:
- Undefined methods (viewAny -> "view any articles")
- Proxies (update/delete routed through manage)
- Custom naming rules ("articles.view-any")
"""
import logging
from dataclasses import dataclass

from policy_permission import Gate, MagicPolicy, NamingRules, PermissionTableOracle, Principal


@dataclass
class Article:
    id: int
    author_id: str


class ArticlePolicy(MagicPolicy):
    proxies = {"manage": ["update", "delete"]}

    def manage(self, actor, article=None):
        # Anyone with "update articles" may update; authors need "update own articles"
        if self.evaluate(actor, resource=article):
            return True
        is_author = article is not None and article.author_id == actor.principal_id
        return is_author and self.evaluate_proxied(actor, "own", article)


def print_section(title: str):
    """Print a section header"""
    print(f"\n{'='*70}")
    print(f"  {title}")
    print(f"{'='*70}\n")


def run(rules: NamingRules, role_permissions):
    oracle = PermissionTableOracle(role_permissions)
    gate = Gate(oracle, rules)
    gate.register(Article, ArticlePolicy)

    editor = Principal("alice", role="editor")
    author = Principal("bob", role="author")
    article = Article(id=1, author_id="bob")
    other = Article(id=2, author_id="carol")

    checks = [
        (editor, "viewAny", Article),
        (editor, "update", article),
        (author, "update", article),
        (author, "update", other),
        (author, "delete", article),
    ]
    for actor, capability, resource in checks:
        allowed = gate.allows(actor, capability, resource)
        target = resource.__name__ if isinstance(resource, type) else f"article #{resource.id}"
        print(f"   {'✓' if allowed else '✗'} {actor.principal_id:<6} {capability:<8} {target}")


def demo():
    """Run the demo"""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print_section("Default naming rules")
    run(NamingRules(), {
        "editor": ["view any articles", "update articles", "delete articles"],
        "author": ["update own articles"],
    })

    print_section("Custom naming rules: {subject}.{action}")
    run(NamingRules(key_pattern="{subject}.{action}", delimiter_between_words="-"), {
        "editor": ["articles.view-any", "articles.update", "articles.delete"],
        "author": ["articles.update-own"],
    })


if __name__ == "__main__":
    demo()
