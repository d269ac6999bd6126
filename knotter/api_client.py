"""HTTP client the globe viewer uses to talk to the API server."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit, urlunsplit
from uuid import UUID

import requests

from knotter.dtos import (
    BallDto,
    BallTransactionDto,
    GetBallTransactionsByGlobeIdResponseDto,
    GetNewGlobeIdResponse,
)

log = logging.getLogger(__name__)

NEW_GLOBE_ID_PATH = "new_globe_id"
FIRST_TRANSACTION = "0"
DEFAULT_TIMEOUT = 10.0


def build_url(base_url: str, path: str) -> str:
    """Append ``path`` to the path of ``base_url``, inserting a '/' where needed."""
    log.info("build_url base_url: %s", base_url)
    log.info("build_url path: %s", path)
    parts = urlsplit(base_url)
    if not parts.scheme:
        raise ValueError(f"relative URL without a base: {base_url!r}")
    if parts.scheme in ("http", "https") and not parts.netloc:
        raise ValueError(f"empty host in URL: {base_url!r}")
    base_path = parts.path or "/"
    if not base_path.endswith("/"):
        base_path += "/"
    return urlunsplit(
        (parts.scheme, parts.netloc, base_path + path, parts.query, parts.fragment)
    )


class ApiClient:
    """Sends ball changes for one globe and polls for the changes of others."""

    def __init__(
        self,
        api_url: str,
        globe_name: str | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_url = api_url
        self.globe_name = globe_name
        self.last_received_transaction = FIRST_TRANSACTION
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _globe_url(self) -> str:
        assert self.globe_name is not None
        return build_url(self.api_url, self.globe_name)

    def insert_ball(self, ball: BallDto) -> str | None:
        """Post a ball to the current globe; returns the server's reply text.

        Nothing is sent while no globe is selected, and None is returned.
        """
        if self.globe_name is None:
            return None
        url = self._globe_url()
        log.info("insert_ball url: %s", url)
        response = self.session.post(
            url,
            data=ball.to_json(),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        log.info("insert_ball response: %s", response.text)
        return response.text

    def delete_ball(self, uuid: UUID) -> str | None:
        """Ask the server to delete a ball; returns the reply text, or None without a globe."""
        if self.globe_name is None:
            return None
        url = f"{self._globe_url()}/{uuid}"
        response = self.session.delete(url, timeout=self.timeout)
        log.info("delete_ball response: %s", response.text)
        return response.text

    def fetch_transactions(self) -> list[BallTransactionDto]:
        """Fetch the transactions after the last one received.

        Without a globe a new one is requested and switched to, and no
        transactions are returned. The last received transaction id moves on
        to the last one of a non-empty batch.
        """
        if self.globe_name is None:
            self.switch_globe(self.request_new_globe_id())
            return []
        url = f"{self._globe_url()}/{self.last_received_transaction}"
        log.info("Sending transaction request to URL: %s", url)
        response = self.session.get(url, timeout=self.timeout)
        batch = GetBallTransactionsByGlobeIdResponseDto.from_dict(response.json())
        if batch.ball_transactions:
            self.last_received_transaction = batch.ball_transactions[-1].transaction_id
        return batch.ball_transactions

    def request_new_globe_id(self) -> str:
        """Ask the server for an unused globe id."""
        url = build_url(self.api_url, NEW_GLOBE_ID_PATH)
        response = self.session.get(url, timeout=self.timeout)
        return GetNewGlobeIdResponse.from_dict(response.json()).new_globe_id

    def switch_globe(self, new_globe_id: str) -> None:
        """Make ``new_globe_id`` the current globe and start reading it from the beginning."""
        if not new_globe_id:
            raise ValueError("Received empty new globe_id.")
        self.globe_name = new_globe_id
        self.last_received_transaction = FIRST_TRANSACTION