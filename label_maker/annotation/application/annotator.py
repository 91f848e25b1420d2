from datetime import datetime, timezone
from typing import Callable

from label_maker.annotation.domain.links import build_boneyard_url, format_timestamp
from label_maker.annotation.domain.roles import CONTAINER_ROLES, ElementRole
from label_maker.annotation.domain.tree import DocumentTreePort, Node
from label_maker.config.logger_config import logger
from label_maker.config.settings import DEFAULT_BONEYARD_URL
from label_maker.registry.domain.models import RegistrySnapshot
from label_maker.registry.domain.rules import normalize_nation_name


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ElementAnnotator:
    """
    Flags nation names on a page that are missing from the registry snapshot.

    Primary names are checked first. A secondary name is skipped when its
    nearest container also holds a primary name, so one nation is never
    flagged twice in the same block.
    """

    def __init__(
        self,
        credential: str,
        boneyard_url: str = DEFAULT_BONEYARD_URL,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.credential = credential or ""
        self.boneyard_url = boneyard_url
        self.clock = clock

    def annotate(self, document: DocumentTreePort, snapshot: RegistrySnapshot) -> int:
        flagged = 0

        for element in document.find_all(ElementRole.PRIMARY):
            display_name = self._read_display_name(document, element)
            if not display_name:
                continue
            if self._flag_if_missing(document, element, display_name, snapshot):
                flagged += 1

        # primary pass 完成後才查詢 secondary
        for element in document.find_all(ElementRole.SECONDARY):
            display_name = self._read_display_name(document, element)
            if not display_name:
                continue
            container = document.nearest_ancestor(element, CONTAINER_ROLES)
            if container is not None and document.contains(container, ElementRole.PRIMARY):
                continue
            if self._flag_if_missing(document, element, display_name, snapshot):
                flagged += 1

        logger.info("Flagged {} CTE nations (snapshot origin: {}).", flagged, snapshot.origin)
        return flagged

    def _flag_if_missing(
        self,
        document: DocumentTreePort,
        element: Node,
        display_name: str,
        snapshot: RegistrySnapshot,
    ) -> bool:
        normalized = normalize_nation_name(display_name)
        if normalized in snapshot:
            return False
        href = build_boneyard_url(
            normalized,
            self.credential,
            format_timestamp(self.clock()),
            boneyard_url=self.boneyard_url,
        )
        document.flag(element, display_name, href)
        logger.debug("Flagged {} as CTE", normalized)
        return True

    @staticmethod
    def _read_display_name(document: DocumentTreePort, element: Node) -> str:
        try:
            text = document.text_of(element)
        except Exception as exc:
            logger.debug("Skipping unreadable element: {}", exc)
            return ""
        return (text or "").strip()
