"""Query pipeline: fetch -> view -> project -> emit."""

import sys
from typing import Any, Callable, Dict, Optional, TextIO

from playtracks.config import QueryConfig
from playtracks.connections.play_publisher import fetch_track_listing
from playtracks.models import TrackListing
from playtracks.output import emit, project
from playtracks.utils.credentials import resolve_credentials
from playtracks.utils.logging import get_logger
from playtracks.views import View, resolve_view

Fetcher = Callable[[str, Dict[str, Any], float], TrackListing]


def render(listing: TrackListing, view: View, expr: str, writer: TextIO) -> None:
    """Shape ``listing`` through ``view``, project it with ``expr`` and write it."""
    emit(project(view(listing), expr), writer)


def run_query(
    config: QueryConfig,
    fetcher: Optional[Fetcher] = None,
    writer: Optional[TextIO] = None,
) -> None:
    """Run one query end to end.

    Everything that can be checked locally (output style, credentials) is
    checked before the API is called.

    Raises:
        ConfigError: Unknown output style or unusable credentials.
        CollaboratorError: The API call failed.
        SerializationError: The result could not be written.
    """
    view = resolve_view(config.output_style)
    credentials = resolve_credentials(config.credentials)

    logger = get_logger()
    logger.debug(
        "Fetching track listing",
        package_name=config.package_name,
        output_style=config.output_style or "highest",
        time_limit=config.time_limit,
    )
    fetch = fetcher or fetch_track_listing
    listing = fetch(config.package_name, credentials, config.time_limit)
    logger.debug("Rendering result", view=view.kind.value, track=view.track)

    render(listing, view, config.jmespath_expr, writer if writer is not None else sys.stdout)
