"""Tests for JMESPath projection and JSON emission."""

import io
import json
import logging

import pytest

from playtracks.exceptions import ProjectionError, SerializationError
from playtracks.models import SelectionResult, TrackListing
from playtracks.output import emit, project, search, to_json_value


class TestProject:
    def test_empty_expression_is_identity(self, listing):
        result = SelectionResult(track="beta", name="1.3", code=15)
        assert project(result, "") is result
        assert project(listing, "") is listing
        assert project(None, "") is None

    def test_field_projection(self):
        result = SelectionResult(track="beta", name="1.3", code=15)
        assert project(result, "code") == 15
        assert project(result, "{t: track, c: code}") == {"t": "beta", "c": 15}

    def test_projection_over_response(self, listing):
        assert project(listing, "tracks[].track") == ["production", "beta"]
        assert project(listing, "tracks[?track=='beta'].releases[].name") == ["1.3"]

    def test_projection_over_plain_value(self):
        assert project({"a": [1, 2, 3]}, "a[1]") == 2

    def test_zero_value_projection_sees_omitted_fields(self):
        assert project(SelectionResult(), "code") is None

    def test_invalid_expression_falls_back(self, caplog):
        """A bad expression is a warning, never a failure."""
        result = SelectionResult(track="beta", name="1.3", code=15)
        with caplog.at_level(logging.WARNING, logger="playtracks"):
            projected = project(result, "code[")

        assert projected is result
        assert "code[" in caplog.text
        assert "[WARN]" in caplog.text

    def test_type_error_falls_back(self, listing):
        assert project(listing, "abs(tracks)") is listing

    def test_unknown_function_falls_back(self, listing):
        assert project(listing, "no_such_function(tracks)") is listing


    def test_version_codes_compare_numerically_with_to_number(self):
        listing = TrackListing.from_response(
            {"tracks": [{"track": "beta", "releases": [{"versionCodes": ["9", "10"]}]}]}
        )
        assert project(listing, "max(tracks[].releases[].versionCodes[])") == "9"
        assert project(listing, "max(tracks[].releases[].versionCodes[].to_number(@))") == 10


class TestSearch:
    def test_search_raises_projection_error(self):
        with pytest.raises(ProjectionError) as exc_info:
            search({"a": 1}, "a[")
        assert exc_info.value.expr == "a["
        assert exc_info.value.original_error is not None


class TestEmit:
    def test_selection_result(self):
        out = io.StringIO()
        emit(SelectionResult(track="beta", name="1.3", code=15), out)
        assert out.getvalue() == '{\n  "track": "beta",\n  "name": "1.3",\n  "code": 15\n}\n'

    def test_zero_value_renders_empty_object(self):
        out = io.StringIO()
        emit(SelectionResult(), out)
        assert out.getvalue() == "{}\n"

    def test_partial_zero_fields_are_omitted(self):
        out = io.StringIO()
        emit(SelectionResult(track="alpha", code=4), out)
        assert json.loads(out.getvalue()) == {"track": "alpha", "code": 4}

    def test_no_html_escaping(self):
        out = io.StringIO()
        emit({"note": "<b> & </b>", "name": "ünïcode"}, out)
        assert "<b> & </b>" in out.getvalue()
        assert "ünïcode" in out.getvalue()
        assert "\\u" not in out.getvalue()

    def test_scalar_and_null(self):
        out = io.StringIO()
        emit(15, out)
        emit(None, out)
        assert out.getvalue() == "15\nnull\n"

    def test_response_is_emitted_verbatim(self, listing, api_response):
        out = io.StringIO()
        emit(listing, out)
        assert json.loads(out.getvalue()) == api_response

    @pytest.mark.parametrize(
        "response",
        [
            {},
            {"kind": "androidpublisher#tracksListResponse", "tracks": [{"track": "alpha"}]},
            {"tracks": [{"track": "beta", "releases": [{"status": "draft", "name": "x"}]}]},
        ],
    )
    def test_sparse_response_is_emitted_verbatim(self, response):
        out = io.StringIO()
        emit(TrackListing.from_response(response), out)
        assert json.loads(out.getvalue()) == response

    def test_two_space_indent(self, listing):
        out = io.StringIO()
        emit(listing, out)
        lines = out.getvalue().splitlines()
        assert lines[1].startswith('  "kind"')

    def test_write_failure_is_wrapped(self):
        out = io.StringIO()
        out.close()
        with pytest.raises(SerializationError):
            emit(SelectionResult(code=1), out)

    def test_unencodable_value(self):
        with pytest.raises(SerializationError):
            emit({"x": object()}, io.StringIO())


def test_to_json_value_passes_plain_values_through():
    value = {"a": 1}
    assert to_json_value(value) is value
