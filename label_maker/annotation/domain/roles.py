from enum import Enum


class ElementRole(str, Enum):
    PRIMARY = "primary_name"
    SECONDARY = "secondary_name"
    PARAGRAPH = "paragraph"
    CARD_CONTAINER = "card_container"
    CARD_NAME = "card_name"
    HYPERLINK = "hyperlink"


# 決定 secondary 名稱是否與 primary 共用同一個容器
CONTAINER_ROLES: tuple[ElementRole, ...] = (
    ElementRole.PARAGRAPH,
    ElementRole.CARD_CONTAINER,
    ElementRole.CARD_NAME,
    ElementRole.HYPERLINK,
)
