#!/usr/bin/env python3
"""Word Chains.

Usage::

    python main.py play                  # interactive menu
    python main.py play -f rich          # Rich terminal
    python main.py play --lenient        # skip the dictionary check
    python main.py stats                 # view all-time stats
    python main.py build-lexicon out.json animals.txt more.json
"""

import importlib
import logging
import random
import sys
from enum import StrEnum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent  # word-chains/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wordchains.engine.gameplay import GameEngine  # noqa: E402
from wordchains.engine.submission import LeaderboardClient  # noqa: E402
from wordchains.models.lexicon import (  # noqa: E402
    LexiconLoader,
    build_word_list,
    default_words_dir,
    write_word_list,
)
from wordchains.models.stats import StatsStore  # noqa: E402

logger = logging.getLogger("wordchains")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "wordchains.frontend.cli.vanilla.app",
    Frontend.rich: "wordchains.frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def _default_data_dir(project_root: Path) -> Path:
    """``data/`` in a source checkout, otherwise the per-user app directory."""
    if (project_root / "pyproject.toml").exists():
        return project_root / "data"
    return Path(typer.get_app_dir("word-chains"))


DATA_DIR = _default_data_dir(PROJECT_ROOT)


def _stats_store(data_dir: Path) -> StatsStore:
    return StatsStore(data_dir / "stats.json")


def _build_engine(
    words_dir: Path,
    store: StatsStore,
    strict: bool,
    api_url: Optional[str],
    session_token: Optional[str],
    seed: Optional[int],
) -> GameEngine:
    lexicon = LexiconLoader(words_dir).load()
    sink = LeaderboardClient(api_url, session_token) if api_url else None
    rng = random.Random(seed) if seed is not None else None
    return GameEngine(lexicon, strict=strict, sink=sink, store=store, rng=rng)


def _print_stats(store: StatsStore) -> None:
    st = store.stats
    print("\n  === ALL-TIME STATS ===")
    if not st.sessions:
        print("  No runs recorded yet.\n")
        return
    print(f"\n  Sessions: {st.sessions}")
    for title, values in (("totals", st.totals), ("records", st.records)):
        print(f"\n  --- {title} ---")
        for key, value in values.items():
            print(f"  {key:<22} {value:g}")
    if st.session_speeds:
        avg = sum(st.session_speeds) / len(st.session_speeds)
        print(f"\n  Average speed: {avg / 1000:.1f}s per word over {len(st.session_speeds)} runs")
    print()


def _menu_loop(engine: GameEngine, store: StatsStore) -> None:
    while True:
        print()
        print("  ====================================")
        print("         W O R D   C H A I N S        ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  View All-time Stats")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in ("1", "2"):
            mod = importlib.import_module(
                {"1": _RUNNERS[Frontend.vanilla], "2": _RUNNERS[Frontend.rich]}[choice]
            )
            mod.run(engine, store)

        elif choice == "3":
            _print_stats(store)

        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, help="Word Chains.")


@app.command()
def play(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    lenient: bool = typer.Option(
        False, "--lenient",
        help="Accept any well-formed word, skipping the dictionary check.",
    ),
    words_dir: Path = typer.Option(
        default_words_dir(), "--words-dir",
        envvar="WORDCHAINS_WORDS_DIR",
        help="Directory holding the JSON word lists.",
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        envvar="WORDCHAINS_DATA_DIR",
        help="Directory for the all-time stats file.",
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url",
        envvar="WORDCHAINS_API_URL",
        help="Leaderboard base URL. Omit to keep runs local.",
    ),
    session_token: Optional[str] = typer.Option(
        None, "--session-token",
        envvar="WORDCHAINS_SESSION_TOKEN",
        help="Session cookie sent with leaderboard submissions.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for starter words and unlock order.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log debug output to stderr."),
) -> None:
    """Play Word Chains."""
    _configure_logging(verbose)
    store = _stats_store(data_dir)
    engine = _build_engine(words_dir, store, not lenient, api_url, session_token, seed)

    if frontend is None:
        _menu_loop(engine, store)
        return

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(engine, store)


@app.command()
def stats(
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        envvar="WORDCHAINS_DATA_DIR",
        help="Directory for the all-time stats file.",
    ),
) -> None:
    """Show all-time stats and exit."""
    _configure_logging(False)
    _print_stats(_stats_store(data_dir))


@app.command("build-lexicon")
def build_lexicon(
    output: Path = typer.Argument(..., help="JSON word list to write."),
    sources: List[Path] = typer.Argument(
        ..., exists=True, dir_okay=False,
        help="Plain-text (one entry per line) or JSON array sources.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log debug output to stderr."),
) -> None:
    """Merge word sources into one lowercase, deduplicated, sorted list."""
    _configure_logging(verbose)
    try:
        words = build_word_list(sources)
    except ValueError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)
    write_word_list(output, words)
    print(f"  Wrote {len(words)} entries to {output}")


if __name__ == "__main__":
    app()
