"""Tests for the track listing models."""

import pytest
from pydantic import ValidationError

from playtracks.models import Release, SelectionResult, TrackListing


class TestTrackListing:
    def test_version_codes_parsed_as_integers(self, listing):
        production = listing.tracks[0]
        assert production.track == "production"
        assert production.releases[0].version_codes == [10, 11]

    def test_missing_fields_default_to_empty(self):
        listing = TrackListing.from_response({"tracks": [{"track": "beta"}]})
        assert listing.tracks[0].releases == []
        assert TrackListing.from_response(None).tracks == []

    def test_extra_api_fields_round_trip(self):
        response = {
            "tracks": [
                {
                    "track": "production",
                    "releases": [
                        {
                            "name": "2.0",
                            "versionCodes": ["200"],
                            "status": "inProgress",
                            "userFraction": 0.1,
                            "releaseNotes": [{"language": "en-US", "text": "Fixes & <tweaks>"}],
                        }
                    ],
                }
            ]
        }
        assert TrackListing.from_response(response).to_json_value() == response

    @pytest.mark.parametrize(
        "response",
        [
            {},
            {"kind": "androidpublisher#tracksListResponse"},
            {"tracks": [{"track": "alpha"}]},
            {"tracks": [{"releases": [{"name": "0.9"}]}]},
            {"tracks": [{"track": "internal", "releases": [{"status": "draft", "name": "x"}]}]},
            {"tracks": [{"track": "beta", "releases": [{"versionCodes": []}]}]},
        ],
    )
    def test_sparse_payload_is_not_padded(self, response):
        """Fields absent from the payload stay absent when written back."""
        assert TrackListing.from_response(response).to_json_value() == response

    def test_listing_is_immutable(self, listing):
        with pytest.raises(ValidationError):
            listing.kind = "changed"

    def test_release_accepts_field_names(self):
        release = Release(name="1.0", version_codes=[1, 2])
        assert release.model_dump(by_alias=True) == {"name": "1.0", "versionCodes": ["1", "2"]}

    def test_invalid_version_code(self):
        with pytest.raises(ValidationError):
            TrackListing.from_response(
                {"tracks": [{"track": "beta", "releases": [{"versionCodes": ["abc"]}]}]}
            )


class TestSelectionResult:
    def test_zero_value_json_is_empty(self):
        assert SelectionResult().to_json_value() == {}
        assert not SelectionResult().found

    def test_json_value_keeps_field_order(self):
        value = SelectionResult(track="beta", name="1.3", code=15).to_json_value()
        assert list(value) == ["track", "name", "code"]

    def test_is_frozen(self):
        result = SelectionResult(code=3)
        with pytest.raises(ValidationError):
            result.code = 4
