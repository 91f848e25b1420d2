"""Infrastructure adapters for page annotation."""

from label_maker.annotation.infrastructure.page_io import load_page, write_page
from label_maker.annotation.infrastructure.soup_document import SoupDocument

__all__ = ["load_page", "SoupDocument", "write_page"]
