"""Output styles: which projection of the track listing gets emitted."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Union

from playtracks.exceptions import UnknownOutputStyle
from playtracks.models import SelectionResult, TrackListing
from playtracks.selector import TrackPredicate, match_all, match_track, select_max

OutputValue = Union[SelectionResult, TrackListing]


class ViewKind(str, Enum):
    """Supported view shapes."""

    HIGHEST = "highest"
    TRACK = "track"
    RESPONSE = "response"


@dataclass(frozen=True)
class View:
    """A resolved output style.

    * ``HIGHEST``: highest version code across every track.
    * ``TRACK``: highest version code within ``track``.
    * ``RESPONSE``: the listing itself, unchanged.
    """

    kind: ViewKind
    track: str = ""

    @property
    def predicate(self) -> TrackPredicate:
        if self.kind == ViewKind.TRACK:
            return match_track(self.track)
        return match_all

    def __call__(self, listing: TrackListing) -> OutputValue:
        if self.kind == ViewKind.RESPONSE:
            return listing
        return select_max(listing, self.predicate)


WELL_KNOWN_TRACKS = ("production", "beta", "alpha", "internal")

OUTPUT_STYLES: Dict[str, View] = {
    "": View(ViewKind.HIGHEST),
    "highest": View(ViewKind.HIGHEST),
    **{name: View(ViewKind.TRACK, track=name) for name in WELL_KNOWN_TRACKS},
    "response": View(ViewKind.RESPONSE),
}


def allowed_styles() -> List[str]:
    """Named output styles, in table order (the empty default is omitted)."""
    return [style for style in OUTPUT_STYLES if style]


def resolve_view(style_name: str) -> View:
    """Resolve an output style name to its view.

    Raises:
        UnknownOutputStyle: If the name is not an exact, case-sensitive match.
    """
    try:
        return OUTPUT_STYLES[style_name]
    except KeyError:
        raise UnknownOutputStyle(style_name, allowed_styles()) from None
