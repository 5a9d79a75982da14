from wordchains.engine.submission.sink import LeaderboardClient, SubmitResult

__all__ = ["LeaderboardClient", "SubmitResult"]
