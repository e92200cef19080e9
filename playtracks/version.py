"""Version information printed by ``playtracks --version``.

Release builds stamp ``COMMIT``, ``COMMIT_DATE`` (unix seconds) and
``TREE_STATE`` into this module. Installs from a VCS URL or an archive fall
back to the commit and hash pip records in ``direct_url.json``.
"""

import json
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, distribution
from typing import Any, Dict

from playtracks import __version__

DISTRIBUTION = "playtracks"

COMMIT = ""
COMMIT_DATE = ""
TREE_STATE = ""


def _direct_url() -> Dict[str, Any]:
    try:
        text = distribution(DISTRIBUTION).read_text("direct_url.json")
    except PackageNotFoundError:
        return {}
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return {}


def _archive_sum(archive_info: Dict[str, Any]) -> str:
    hashes = archive_info.get("hashes") or {}
    if hashes:
        algorithm = "sha256" if "sha256" in hashes else sorted(hashes)[0]
        return f"{algorithm}:{hashes[algorithm]}"
    legacy = archive_info.get("hash", "")
    return legacy.replace("=", ":", 1)


def _format_commit_date(value: str) -> str:
    if not value.isdigit():
        return value
    stamp = datetime.fromtimestamp(int(value), tz=timezone.utc)
    return f"{value}; {stamp.isoformat()}"


def version_info() -> Dict[str, str]:
    """Return version, commit, commit_date, tree_state and sum, dropping empty ones."""
    direct_url = _direct_url()
    info = {
        "version": __version__,
        "commit": COMMIT or (direct_url.get("vcs_info") or {}).get("commit_id", ""),
        "commit_date": _format_commit_date(COMMIT_DATE) if COMMIT_DATE else "",
        "tree_state": TREE_STATE,
        "sum": _archive_sum(direct_url.get("archive_info") or {}),
    }
    return {key: value for key, value in info.items() if value}
