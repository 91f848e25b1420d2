import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

log_dir = Path(os.getenv("LABEL_MAKER_LOG_DIR") or "logs")
log_file = log_dir / "{time}.log"

logger.remove()
logger.add(
    log_file,
    rotation="256 MB",  # 每個檔案滿 256MB 就切分
    retention="10 days",  # 只保留最近 10 天的日誌
    compression="zip",  # 切分後的舊檔案自動壓縮成 zip
    encoding="utf-8",
    level=(os.getenv("LABEL_MAKER_LOG_LEVEL") or "DEBUG").upper(),
)
# 終端機只顯示警告以上
logger.add(sys.stderr, level="WARNING")
