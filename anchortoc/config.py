from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from anchortoc.toc import TocOptions

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".anchortoc.json"


def _debug_enabled(var_name: str) -> bool:
    """Check if a debug flag is enabled."""
    return os.getenv(var_name, "0") not in ("0", "false", "False", "", None)


def debug_logging_enabled() -> bool:
    return _debug_enabled("ANCHORTOC_DEBUG")


def project_config_path(root: Path) -> Path:
    return Path(root) / PROJECT_CONFIG_NAME


def _read_project_config(root: Path) -> dict:
    """Return the parsed project config, or an empty dict on error/missing."""
    path = project_config_path(root)
    if not path.exists():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    return payload if isinstance(payload, dict) else {}


def save_project_config(root: Path, updates: dict) -> None:
    payload = _read_project_config(root)
    payload.update(updates)
    path = project_config_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def load_toc_default(root: Path) -> bool:
    """Whether pages without an explicit toc flag are opted in (default: False)."""
    payload = _read_project_config(root)
    return bool(payload.get("toc_default", False))


def load_include_id(root: Path) -> bool:
    payload = _read_project_config(root)
    if "include_id" in payload:
        return bool(payload["include_id"])
    return True


def load_toc_options(root: Path) -> TocOptions:
    return TocOptions(include_id=load_include_id(root))
