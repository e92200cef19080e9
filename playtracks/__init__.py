"""playtracks - highest live version codes on Google Play tracks."""

__version__ = "1.0.0"

from playtracks.models import Release, SelectionResult, Track, TrackListing  # noqa: E402
from playtracks.output import emit, project  # noqa: E402
from playtracks.selector import match_all, match_track, select_max  # noqa: E402
from playtracks.views import View, ViewKind, resolve_view  # noqa: E402

__all__ = [
    "Release",
    "SelectionResult",
    "Track",
    "TrackListing",
    "View",
    "ViewKind",
    "emit",
    "match_all",
    "match_track",
    "project",
    "resolve_view",
    "select_max",
    "__version__",
]


# Lazy imports for components that pull in the Google API client
def __getattr__(name):
    if name == "run_query":
        from playtracks.pipeline import run_query

        return run_query
    if name == "fetch_track_listing":
        from playtracks.connections.play_publisher import fetch_track_listing

        return fetch_track_listing
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
