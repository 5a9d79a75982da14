"""Vanilla terminal frontend with no rendering library.

Uses only print and ANSI codes for output and the shared raw-key reader for
input.  Includes a built-in menu for strict/lenient mode, play, and stats.
"""

from __future__ import annotations

import sys
import time

from wordchains.engine.gameplay import GameEngine, RunReport
from wordchains.frontend.cli.commands import HELP, command_for, run_command
from wordchains.frontend.cli.input_handler import LineEditor, get_key, get_key_timeout
from wordchains.models.categories import CATEGORIES, LABELS, MAX_LIVES, POWER_NAMES, PowerKey
from wordchains.models.stats import StatsStore


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset
_BG_SEL = "\033[42;30m"  # green bg, black fg (selected option)


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _links(value: float) -> str:
    return f"{value:g}"


# -- run rendering ------------------------------------------------------------


def _header(engine: GameEngine) -> str:
    s = engine.state
    hearts = f"{_RED}{'♥' * s.lives}{_R}{_DIM}{'♡' * (MAX_LIVES - s.lives)}{_R}"
    clock = f"{engine.time_remaining:>2}s"
    if engine.is_paused:
        clock += f" {_C}(frozen){_R}"
    elif engine.time_remaining <= 5:
        clock = f"{_RED}{clock}{_R}"
    return (
        f"  Score: {_Y}{s.score}{_R}  |  Lives: {hearts}  |  Time: {clock}  |  "
        f"LINKS: {_Y}{_links(s.links)}{_R}  |  "
        f"Mult: {_Y}x{engine.effective_multiplier:.2f}{_R}"
    )


def _prompt_line(engine: GameEngine) -> str:
    last = engine.state.last_word
    if not last:
        return "  Any word starts the chain."
    return (
        f"  Last word: {_BOLD}{last}{_R}   "
        f"start with {_C}{last[-1].lower()}{_R}, include {_C}{last[0].lower()}{_R}"
    )


def _render_chains(engine: GameEngine) -> str:
    s = engine.state
    lines = [f"  {_BOLD}Chains{_R}  {_DIM}same-letter x{s.same_letter_multiplier:.2f}{_R}"]
    for cat in CATEGORIES:
        chain = s.chains[cat]
        active = cat in s.previous_categories
        mark = f"{_G}●{_R}" if active else (f"{_C}❄{_R}" if chain.frozen else " ")
        lines.append(
            f"   {mark} {LABELS[cat]:<10} len {chain.length:>2}  x{chain.multiplier:.2f}"
        )
    return "\n".join(lines)


def _render_missions(engine: GameEngine) -> str:
    s = engine.state
    lines = [f"  {_BOLD}Missions{_R}"]
    for mission in engine.active_missions():
        prog = engine.missions.progress(s, mission)
        idx = s.mission_index[mission.owner]
        total = len(engine.missions.tracks[mission.owner])
        lines.append(
            f"   {_C}{LABELS[mission.owner]:<10}{_R} {idx + 1}/{total}  {mission.describe()}  "
            f"{_DIM}({prog:g}/{mission.goal:g}){_R}"
        )
    done = sorted(s.completed_tracks)
    if done:
        lines.append(f"   {_G}Completed tracks: {', '.join(LABELS[o] for o in done)}{_R}")
    return "\n".join(lines)


def _render_powers(engine: GameEngine) -> str:
    s = engine.state
    cells: list[str] = []
    for key in PowerKey:
        cur, need = engine.powerups.progress(s, key)
        charges = s.power_charges[key]
        label = f"{POWER_NAMES[key]} {command_for(key)}"
        if charges:
            cells.append(f"{_G}{label} x{charges}{_R}")
        else:
            cells.append(f"{_DIM}{label} {cur}/{need}{_R}")
    return "  " + f"{_BOLD}Power-ups{_R}\n   " + "\n   ".join(cells)


def _show_run(engine: GameEngine, editor: LineEditor, status: str = "") -> None:
    _clear()
    print(f"  {_C}=== W O R D   C H A I N S ==={_R}"
          f"  {_DIM}{'strict' if engine.strict else 'lenient'}{_R}")
    print()
    print(_header(engine))
    print()
    print(_prompt_line(engine))
    print()
    print(_render_chains(engine))
    print()
    print(_render_missions(engine))
    print()
    print(_render_powers(engine))
    recent = engine.state.recent[:8]
    if recent:
        print(f"\n  {_DIM}Recent: {', '.join(recent)}{_R}")
    if status:
        print(f"\n  {status}")
    sys.stdout.write(f"\n  > {editor.buffer}")
    sys.stdout.flush()


def _show_report(report: RunReport) -> None:
    s = report.summary
    print()
    print(f"  {_RED}Game over:{_R} {report.reason}")
    print()
    print(f"  Score: {_Y}{s.best_score}{_R}  |  Words: {_Y}{s.total_words}{_R}  |  "
          f"Longest chain: {_Y}{s.longest_chain}{_R}  |  "
          f"Peak multiplier: {_Y}x{s.highest_multiplier:.2f}{_R}")
    if s.average_word_ms:
        print(f"  Average speed: {_Y}{s.average_word_ms / 1000:.1f}s{_R} per word")
    if report.submission is not None:
        colour = _G if report.submission.ok else _Y
        print(f"  {colour}{report.submission.message}{_R}")
    if report.all_time is not None:
        print(f"  {_DIM}All-time stats saved.{_R}")


# -- menu & stats screens -----------------------------------------------------


def _show_menu(strict: bool) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}        W O R D   C H A I N S         {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()
    modes = ""
    for label, on in (("Strict", strict), ("Lenient", not strict)):
        modes += f"  {_BG_SEL} {label} {_R}" if on else f"  {_DIM}{label}{_R}"
    print(f"    Mode:{modes}")
    print(f"    {_DIM}← → to change{_R}")
    print()
    print(f"    {_C}1{_R}  Play")
    print(f"    {_DIM}2{_R}  All-time Stats")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


def _show_stats(store: StatsStore | None) -> None:
    _clear()
    print()
    print(f"  {_BOLD}=== ALL-TIME STATS ==={_R}")
    if store is None or not store.stats.sessions:
        print(f"\n  {_DIM}No runs recorded yet.{_R}")
    else:
        st = store.stats
        print(f"\n  Sessions: {_Y}{st.sessions}{_R}")
        print(f"\n  {_C}--- totals ---{_R}")
        for key, value in st.totals.items():
            print(f"  {key:<20} {_Y}{value:g}{_R}")
        print(f"\n  {_C}--- records ---{_R}")
        for key, value in st.records.items():
            print(f"  {key:<20} {_Y}{value:g}{_R}")
    print(f"\n  {_DIM}Press any key to go back.{_R}")
    get_key()


# -- game loop ----------------------------------------------------------------


def _play_run(engine: GameEngine) -> bool:
    """Play one run.  Returns True if the player wants another."""
    engine.start()
    editor = LineEditor()
    status = HELP
    next_tick = time.monotonic() + 1.0
    dirty = True

    while engine.is_running:
        if dirty:
            _show_run(engine, editor, status)
            dirty = False

        key = get_key_timeout(0.25)
        now = time.monotonic()
        while now >= next_tick and engine.is_running:
            result = engine.tick()
            if result is not None:
                status = f"{_RED}{result.message}{_R}"
            next_tick += 1.0
            dirty = True
        if key is None:
            continue
        dirty = True

        if key in ("interrupt", "escape"):
            engine.end("Run ended.")
            break
        line = editor.feed(key)
        if line is None:
            continue

        line = line.strip()
        if line.startswith("/"):
            outcome = run_command(engine, line)
            if outcome.quit:
                engine.end("Run ended.")
                break
            status = f"{_C}{outcome.message}{_R}"
            continue

        result = engine.submit(line)
        if result.accepted:
            status = f"{_G}{result.message}{_R}"
        elif result.message:
            status = f"{_Y}{result.message}{_R}"

    _clear()
    if engine.report is not None:
        _show_report(engine.report)
    print(f"\n  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")

    while True:
        key = get_key()
        if key in ("r", "R", "enter"):
            return True
        if key in ("q", "Q", "escape", "interrupt"):
            return False


# -- menu loop ----------------------------------------------------------------


def _menu_loop(engine: GameEngine, store: StatsStore | None) -> None:
    while True:
        _show_menu(engine.strict)
        key = get_key()

        if key in ("q", "Q", "escape", "interrupt"):
            _clear()
            print("  Goodbye!\n")
            return
        elif key in ("left", "right"):
            engine.strict = not engine.strict
        elif key in ("1", "enter"):
            while _play_run(engine):
                pass
        elif key == "2":
            _show_stats(store)


# -- public entry point -------------------------------------------------------


def run(engine: GameEngine, store: StatsStore | None = None) -> None:
    """Launch the vanilla CLI with interactive menu."""
    _menu_loop(engine, store)
