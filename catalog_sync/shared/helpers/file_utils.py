"""
Output file helpers
"""

import json
import re
from pathlib import Path
from typing import Any, Union

from catalog_sync.core.logging import get_logger

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def ensure_directory(path: Union[str, Path]) -> Path:
    """Create a directory (and parents) if it does not exist"""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def safe_filename(name: str) -> str:
    """Replace anything that is not safe in a file name with underscores"""
    cleaned = _UNSAFE_CHARS.sub("_", name).strip("._")
    return cleaned or "output"


def write_json(path: Union[str, Path], data: Any) -> Path:
    """Write data as pretty-printed UTF-8 JSON, creating parent directories"""
    target = Path(path)
    ensure_directory(target.parent)
    with target.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=str)
    logger.debug("Wrote JSON file", path=str(target))
    return target
