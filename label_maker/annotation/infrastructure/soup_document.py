from dataclasses import dataclass
from itertools import chain
from typing import Sequence

from bs4 import BeautifulSoup, Tag

from label_maker.annotation.domain.roles import ElementRole
from label_maker.annotation.domain.tree import DocumentTreePort

ICON_CLASS = "icon-monument"
CTE_TEXT = "(CTE)"


@dataclass(frozen=True)
class RoleMatcher:
    tag_name: str | None = None
    css_class: str | None = None

    def matches(self, node: object) -> bool:
        if not isinstance(node, Tag) or isinstance(node, BeautifulSoup):
            return False
        if self.tag_name is not None and node.name != self.tag_name:
            return False
        if self.css_class is not None and self.css_class not in (node.get("class") or ()):
            return False
        return True


# .nname / .nnameblock / p, .deckcard-container, .deckcard-name, a
ROLE_MATCHERS: dict[ElementRole, RoleMatcher] = {
    ElementRole.PRIMARY: RoleMatcher(css_class="nname"),
    ElementRole.SECONDARY: RoleMatcher(css_class="nnameblock"),
    ElementRole.PARAGRAPH: RoleMatcher(tag_name="p"),
    ElementRole.CARD_CONTAINER: RoleMatcher(css_class="deckcard-container"),
    ElementRole.CARD_NAME: RoleMatcher(css_class="deckcard-name"),
    ElementRole.HYPERLINK: RoleMatcher(tag_name="a"),
}


class SoupDocument(DocumentTreePort):
    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup

    @classmethod
    def from_html(cls, html: str) -> "SoupDocument":
        return cls(BeautifulSoup(html, "lxml"))

    def render(self) -> str:
        return str(self.soup)

    def find_all(self, role: ElementRole) -> Sequence[Tag]:
        return self.soup.find_all(ROLE_MATCHERS[role].matches)

    def nearest_ancestor(self, node: Tag, roles: Sequence[ElementRole]) -> Tag | None:
        matchers = [ROLE_MATCHERS[role] for role in roles]
        for candidate in chain([node], node.parents):
            if any(matcher.matches(candidate) for matcher in matchers):
                return candidate
        return None

    def contains(self, container: Tag, role: ElementRole) -> bool:
        return container.find(ROLE_MATCHERS[role].matches) is not None

    def text_of(self, node: Tag) -> str | None:
        return node.get_text()

    def flag(self, node: Tag, display_name: str, href: str) -> None:
        link = self.soup.new_tag("a", href=href)
        link.append(self.soup.new_tag("i", attrs={"class": ICON_CLASS}))
        link.append(CTE_TEXT)

        node.clear()
        node.append(f"{display_name} ")
        node.append(link)
