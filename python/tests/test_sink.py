"""Leaderboard submission with HTTP mocked out."""

from __future__ import annotations

from unittest import mock

import pytest
import requests

from wordchains.engine.submission.sink import LeaderboardClient
from wordchains.models.stats import RunSummary

SUMMARY = RunSummary(
    best_score=420,
    longest_chain=4,
    highest_multiplier=7.5,
    total_words=4,
    unique_words=4,
    animals=2,
    countries=1,
    names=0,
    same_letter_words=0,
    switches=1,
    links_earned=0.5,
    links_spent=0.0,
)


def _response(status: int) -> mock.Mock:
    return mock.Mock(status_code=status, ok=200 <= status < 400)


@mock.patch("wordchains.engine.submission.sink.requests.post")
def test_posts_payload_with_session_cookie(post: mock.Mock) -> None:
    post.return_value = _response(200)
    client = LeaderboardClient("https://example.test/", session_token="abc")

    result = client.submit(SUMMARY)

    assert result.ok
    assert result.message == "Saved to the global leaderboard."
    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == "https://example.test/api/stats/ingest"
    assert kwargs["json"]["bestScore"] == 420
    assert kwargs["json"]["highestMultiplier"] == 8
    assert kwargs["cookies"] == {"next-auth.session-token": "abc"}


@mock.patch("wordchains.engine.submission.sink.requests.post")
def test_no_cookie_without_token(post: mock.Mock) -> None:
    post.return_value = _response(200)
    LeaderboardClient("https://example.test").submit(SUMMARY)
    assert post.call_args.kwargs["cookies"] is None


@pytest.mark.parametrize(
    "status, message",
    [
        (401, "Sign in to save your score."),
        (500, "Save failed (HTTP 500)."),
    ],
)
@mock.patch("wordchains.engine.submission.sink.requests.post")
def test_http_errors(post: mock.Mock, status: int, message: str) -> None:
    post.return_value = _response(status)
    result = LeaderboardClient("https://example.test").submit(SUMMARY)
    assert not result.ok
    assert result.status == status
    assert result.message == message
    assert result.unauthenticated is (status == 401)


@mock.patch("wordchains.engine.submission.sink.requests.post")
def test_network_error_does_not_raise(post: mock.Mock) -> None:
    post.side_effect = requests.ConnectionError("unreachable")
    result = LeaderboardClient("https://example.test").submit(SUMMARY)
    assert not result.ok
    assert result.status == 0
    assert result.message == "Network error saving score."
    post.assert_called_once()


@mock.patch("wordchains.engine.submission.sink.requests.post")
def test_submit_uses_a_short_timeout(post: mock.Mock) -> None:
    post.return_value = _response(200)
    LeaderboardClient("https://example.test").submit(SUMMARY)
    assert post.call_args.kwargs["timeout"] == 5.0
