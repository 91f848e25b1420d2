import re

from bs4 import BeautifulSoup

NATIONS_TAG = "NATIONS"

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_nation_name(nation_name: str) -> str:
    """Lowercase a display name and collapse every whitespace run into one underscore."""
    return _WHITESPACE_RUN.sub("_", nation_name.lower())


def parse_nation_list(xml_text: str) -> list[str] | None:
    """
    Extract the comma-delimited ``<NATIONS>`` payload and normalize each entry.

    Returns ``None`` when the document has no ``NATIONS`` element.
    """
    soup = BeautifulSoup(xml_text, "xml")
    nations_tag = soup.find(NATIONS_TAG)
    if nations_tag is None:
        return None

    names: list[str] = []
    for raw in nations_tag.get_text().split(","):
        raw = raw.strip()
        if not raw:
            continue
        names.append(normalize_nation_name(raw))
    return names
