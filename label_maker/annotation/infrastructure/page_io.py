from pathlib import Path

import requests

from label_maker.config.logger_config import logger


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_page(source: str | Path, user_agent: str | None = None) -> str:
    """讀取本機 HTML 檔或下載網頁"""
    source_str = str(source)
    if not is_url(source_str):
        return Path(source_str).read_text(encoding="utf-8", errors="replace")

    headers = {"User-Agent": user_agent} if user_agent else {}
    logger.info("Downloading page {}", source_str)
    resp = requests.get(source_str, headers=headers, timeout=30)
    resp.raise_for_status()
    return resp.text


def default_output_path(source: str | Path) -> Path:
    source_str = str(source)
    if is_url(source_str):
        return Path("labelled.html")
    path = Path(source_str)
    return path.with_name(f"{path.stem}.labelled.html")


def write_page(html: str, output_path: str | Path) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(html)
    return path
