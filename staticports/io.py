from __future__ import annotations

from pathlib import Path
import json
import logging
import re

from .errors import ConfigEmpty, ConfigNotFound
from .parameters import Parameters

logger = logging.getLogger(__name__)

# Strings first so comment markers and commas inside them are left alone.
_JSON_NOISE = re.compile(
    r'(?P<str>"(?:\\.|[^"\\])*")'
    r"|(?P<line>//[^\n]*)"
    r"|(?P<block>/\*.*?\*/)"
    r"|(?P<trail>,)(?=\s*(?:(?://[^\n]*|/\*.*?\*/)\s*)*[}\]])",
    re.DOTALL,
)


def strip_json_comments(text: str) -> str:
    """Drop ``//`` and ``/* */`` comments and trailing commas outside string literals."""
    def _sub(m: re.Match) -> str:
        if m.group("str") is not None:
            return m.group("str")
        if m.group("block") is not None:
            return " "
        return ""
    return _JSON_NOISE.sub(_sub, text)


def read_parameter_document(path: Path) -> dict:
    path = Path(path)
    if not path.is_file():
        raise ConfigNotFound(f"File not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise ConfigEmpty(f"Empty file: {path} ({e})") from e
    cleaned = strip_json_comments(text).strip()
    if not cleaned:
        raise ConfigEmpty(f"Empty file: {path}")
    try:
        doc = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ConfigEmpty(f"Empty file: {path} ({e})") from e
    if doc is None:
        raise ConfigEmpty(f"Empty file: {path}")
    return doc


def load_parameters(path: Path) -> Parameters:
    """Read a parameter file and overlay its values on the defaults."""
    logger.info("Loading parameters from %s", path)
    params = Parameters.from_mapping(read_parameter_document(path))
    logger.info("Parameters: %s", params.to_dict())
    return params
