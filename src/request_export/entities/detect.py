"""Auto-detect request file format."""

from pathlib import Path

import yaml


def detect_format(file_path: Path) -> str:
    """Detect the format of a request file.

    Returns: 'postman' or 'request'.
    """
    text = file_path.read_text(encoding="utf-8")

    # JSON is valid YAML, so one parse covers both
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return "request"

    if isinstance(data, dict):
        info = data.get("info")
        if isinstance(info, dict) and "_postman_id" in info:
            return "postman"
        if isinstance(info, dict) and "getpostman.com" in str(info.get("schema", "")):
            return "postman"
    return "request"
