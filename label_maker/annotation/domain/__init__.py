"""Domain roles, link rules and the document tree contract."""

from label_maker.annotation.domain.links import SCRIPT_TAG, build_boneyard_url, format_timestamp
from label_maker.annotation.domain.roles import CONTAINER_ROLES, ElementRole
from label_maker.annotation.domain.tree import DocumentTreePort

__all__ = [
    "build_boneyard_url",
    "CONTAINER_ROLES",
    "DocumentTreePort",
    "ElementRole",
    "format_timestamp",
    "SCRIPT_TAG",
]
