"""Fire-and-forget upload of a finished run to the global leaderboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from wordchains.models.stats import RunSummary

logger = logging.getLogger(__name__)

INGEST_PATH = "/api/stats/ingest"
SESSION_COOKIE = "next-auth.session-token"


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    status: int
    message: str = ""

    @property
    def unauthenticated(self) -> bool:
        return self.status == 401


class LeaderboardClient:
    """POSTs run summaries to ``<base_url>/api/stats/ingest``.

    Never raises for transport or HTTP errors and never retries; the caller
    only learns whether the run was recorded server-side. The request blocks
    the end-of-run screen, so the timeout is kept short.
    """

    def __init__(
        self,
        base_url: str,
        session_token: str | None = None,
        timeout: float = 5.0,
    ) -> None:
        self.url = base_url.rstrip("/") + INGEST_PATH
        self.session_token = session_token
        self.timeout = timeout

    def submit(self, summary: RunSummary) -> SubmitResult:
        cookies = {SESSION_COOKIE: self.session_token} if self.session_token else None
        try:
            response = requests.post(
                self.url,
                json=summary.to_payload(),
                cookies=cookies,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("could not reach leaderboard at %s: %s", self.url, exc)
            return SubmitResult(ok=False, status=0, message="Network error saving score.")

        if response.status_code == 401:
            logger.info("leaderboard rejected run: not signed in")
            return SubmitResult(ok=False, status=401, message="Sign in to save your score.")
        if not response.ok:
            logger.warning("leaderboard returned HTTP %s", response.status_code)
            return SubmitResult(
                ok=False,
                status=response.status_code,
                message=f"Save failed (HTTP {response.status_code}).",
            )
        return SubmitResult(ok=True, status=response.status_code, message="Saved to the global leaderboard.")
