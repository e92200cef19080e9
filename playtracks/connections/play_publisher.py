"""Google Play Developer API (androidpublisher v3) track listing.

Reading tracks requires an edit session: an edit is inserted and its tracks are
listed. The edit is never committed, so no remote state changes.
"""

import socket
import time
from typing import Any, Dict, Optional

import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pydantic import ValidationError

from playtracks.config import DEFAULT_TIME_LIMIT
from playtracks.exceptions import CollaboratorError
from playtracks.models import TrackListing
from playtracks.utils.logging import get_logger

SCOPES = ["https://www.googleapis.com/auth/androidpublisher"]

_AUTH_SUGGESTIONS = [
    "Verify the credentials are a valid service account JSON key",
    "Grant the service account access to the app under Play Console > Users and permissions",
    "Make sure the Google Play Android Developer API is enabled for the key's project",
]
_NOT_FOUND_SUGGESTIONS = [
    "Check the package name (e.g. com.example.app)",
    "The app must already exist in Play Console",
]
_TIMEOUT_SUGGESTIONS = ["Increase --time-limit / TIME_LIMIT"]


class PlayPublisherConnection:
    """Connection to the androidpublisher API for one service account."""

    def __init__(
        self,
        credentials_info: Dict[str, Any],
        time_limit: float = DEFAULT_TIME_LIMIT,
        service: Optional[Any] = None,
    ):
        """Initialize the connection.

        Args:
            credentials_info: Parsed service account JSON key
            time_limit: Total time budget for all API calls, in seconds
            service: Prebuilt discovery service (skips building one)
        """
        self.credentials_info = credentials_info
        self.time_limit = time_limit
        self._service = service
        self._deadline: Optional[float] = None

    def _build_service(self) -> Any:
        credentials = service_account.Credentials.from_service_account_info(
            self.credentials_info, scopes=SCOPES
        )
        http = google_auth_httplib2.AuthorizedHttp(
            credentials, http=httplib2.Http(timeout=self.time_limit)
        )
        return build("androidpublisher", "v3", http=http, cache_discovery=False)

    def _remaining(self) -> float:
        if self._deadline is None:
            return self.time_limit
        return self._deadline - time.monotonic()

    def _check_deadline(self, package_name: str, step: str) -> None:
        if self._remaining() <= 0:
            raise CollaboratorError(
                package_name,
                f"time limit of {self.time_limit:g}s exceeded before {step}",
                suggestions=_TIMEOUT_SUGGESTIONS,
            )

    def _execute(self, request: Any, package_name: str, step: str) -> Dict[str, Any]:
        self._check_deadline(package_name, step)
        logger = get_logger()
        logger.debug("Calling androidpublisher", step=step, package_name=package_name)
        try:
            return request.execute(num_retries=0)
        except HttpError as e:
            raise _http_error(package_name, step, e) from e
        except GoogleAuthError as e:
            raise CollaboratorError(
                package_name,
                f"authentication failed during {step}: {e}",
                suggestions=_AUTH_SUGGESTIONS,
                original_error=e,
            ) from e
        except (socket.timeout, TimeoutError) as e:
            raise CollaboratorError(
                package_name,
                f"timed out during {step} (limit {self.time_limit:g}s)",
                suggestions=_TIMEOUT_SUGGESTIONS,
                original_error=e,
            ) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise CollaboratorError(
                package_name,
                f"transport error during {step}: {e}",
                original_error=e,
            ) from e

    def list_tracks(self, package_name: str) -> TrackListing:
        """List all tracks of ``package_name`` through a fresh edit session.

        Raises:
            CollaboratorError: On any authentication, API or transport failure.
        """
        self._deadline = time.monotonic() + self.time_limit

        if self._service is None:
            try:
                self._service = self._build_service()
            except (GoogleAuthError, ValueError) as e:
                raise CollaboratorError(
                    package_name,
                    f"cannot build API client: {e}",
                    suggestions=_AUTH_SUGGESTIONS,
                    original_error=e,
                ) from e

        edits = self._service.edits()
        app_edit = self._execute(
            edits.insert(packageName=package_name, body={}), package_name, "edits.insert"
        )
        edit_id = app_edit.get("id")
        if not edit_id:
            raise CollaboratorError(package_name, "edits.insert returned no edit id")

        response = self._execute(
            edits.tracks().list(packageName=package_name, editId=edit_id),
            package_name,
            "edits.tracks.list",
        )

        try:
            listing = TrackListing.from_response(response)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            raise CollaboratorError(
                package_name,
                f"unexpected edits.tracks.list payload at {location or '<root>'}: {first.get('msg')}",
                original_error=e,
            ) from e

        get_logger().debug(
            "Fetched track listing",
            package_name=package_name,
            edit_id=edit_id,
            tracks=[track.track for track in listing.tracks],
        )
        return listing


def _http_error(package_name: str, step: str, error: HttpError) -> CollaboratorError:
    status = getattr(error.resp, "status", None)
    reason = getattr(error, "reason", None) or str(error)
    suggestions = []
    if status in (401, 403):
        suggestions = _AUTH_SUGGESTIONS
    elif status == 404:
        suggestions = _NOT_FOUND_SUGGESTIONS
    return CollaboratorError(
        package_name,
        f"{step} failed with HTTP {status}: {reason}",
        suggestions=suggestions,
        original_error=error,
    )


def fetch_track_listing(
    package_name: str,
    credentials: Dict[str, Any],
    time_limit: float = DEFAULT_TIME_LIMIT,
) -> TrackListing:
    """Fetch the track listing of ``package_name`` with service account ``credentials``."""
    return PlayPublisherConnection(credentials, time_limit=time_limit).list_tracks(package_name)
