"""Page annotation package."""

from label_maker.annotation.application.annotator import ElementAnnotator
from label_maker.annotation.infrastructure.soup_document import SoupDocument

__all__ = ["ElementAnnotator", "SoupDocument"]
