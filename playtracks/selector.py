"""Highest version code selection over a track listing."""

from typing import Callable

from playtracks.models import SelectionResult, TrackListing

TrackPredicate = Callable[[str], bool]


def match_all(track_name: str) -> bool:
    return True


def match_track(name: str) -> TrackPredicate:
    """Predicate matching exactly one track name (case-sensitive)."""

    def predicate(track_name: str) -> bool:
        return track_name == name

    return predicate


def select_max(listing: TrackListing, predicate: TrackPredicate) -> SelectionResult:
    """Return the highest version code among tracks accepted by ``predicate``.

    Tracks, releases and codes are scanned in listing order and only a strictly
    greater code replaces the current best, so on equal codes the first one
    encountered wins. Returns the zero ``SelectionResult`` when nothing matches.
    """
    track, name, code = "", "", 0
    for candidate in listing.tracks:
        if not predicate(candidate.track):
            continue
        for release in candidate.releases:
            for version_code in release.version_codes:
                if code < version_code:
                    track, name, code = candidate.track, release.name, version_code
    return SelectionResult(track=track, name=name, code=code)
