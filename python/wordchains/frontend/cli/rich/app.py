"""Rich terminal frontend: tables, colours and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler, slash commands and engine as the vanilla CLI.
"""

from __future__ import annotations

import time

import rich.box
from rich.align import Align
from rich.columns import Columns
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wordchains.engine.gameplay import GameEngine, RunReport
from wordchains.frontend.cli.commands import HELP, command_for, run_command
from wordchains.frontend.cli.input_handler import LineEditor, get_key, get_key_timeout
from wordchains.models.categories import CATEGORIES, LABELS, MAX_LIVES, POWER_NAMES, PowerKey
from wordchains.models.stats import StatsStore

console = Console()

_STYLES: dict[str, str] = {
    "main": "white",
    "name": "blue",
    "animal": "green",
    "country": "magenta",
    "food": "yellow",
    "brand": "red",
    "screen": "cyan",
    "same": "bright_white",
}


# -- run rendering ------------------------------------------------------------


def _render_header(engine: GameEngine) -> Text:
    s = engine.state
    header = Text()
    header.append("  Score: ", style="dim")
    header.append(str(s.score), style="bold yellow")
    header.append("    Lives: ", style="dim")
    header.append("♥" * s.lives, style="bold red")
    header.append("♡" * (MAX_LIVES - s.lives), style="dim")
    header.append("    Time: ", style="dim")
    if engine.is_paused:
        header.append(f"{engine.time_remaining}s frozen", style="bold cyan")
    else:
        style = "bold red" if engine.time_remaining <= 5 else "bold yellow"
        header.append(f"{engine.time_remaining}s", style=style)
    header.append("    LINKS: ", style="dim")
    header.append(f"{s.links:g}", style="bold yellow")
    header.append("    Mult: ", style="dim")
    header.append(f"x{engine.effective_multiplier:.2f}", style="bold green")
    return header


def _render_prompt(engine: GameEngine) -> Text:
    last = engine.state.last_word
    text = Text()
    if not last:
        text.append("  Any word starts the chain.", style="dim")
        return text
    text.append("  Last word: ", style="dim")
    text.append(last, style="bold")
    text.append("   start with ", style="dim")
    text.append(last[-1].lower(), style="bold cyan")
    text.append(", include ", style="dim")
    text.append(last[0].lower(), style="bold cyan")
    return text


def _render_chains(engine: GameEngine) -> Table:
    s = engine.state
    table = Table(
        title=f"Chains  (same-letter x{s.same_letter_multiplier:.2f})",
        title_style="bold",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("", width=2)
    table.add_column("Category")
    table.add_column("Len", justify="right")
    table.add_column("Mult", justify="right", style="yellow")
    for cat in CATEGORIES:
        chain = s.chains[cat]
        if cat in s.previous_categories:
            mark = "[bold green]●[/bold green]"
        elif chain.frozen:
            mark = "[cyan]❄[/cyan]"
        else:
            mark = ""
        locked = "" if s.is_unlocked(cat) else " [dim](locked)[/dim]"
        table.add_row(
            mark,
            f"[{_STYLES[cat]}]{LABELS[cat]}[/{_STYLES[cat]}]{locked}",
            str(chain.length),
            f"x{chain.multiplier:.2f}",
        )
    return table


def _render_missions(engine: GameEngine) -> Table:
    s = engine.state
    table = Table(title="Missions", title_style="bold", box=rich.box.ROUNDED, border_style="dim")
    table.add_column("Track")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Goal")
    table.add_column("Progress", justify="right", style="yellow")
    for mission in engine.active_missions():
        owner = mission.owner
        prog = engine.missions.progress(s, mission)
        total = len(engine.missions.tracks[owner])
        table.add_row(
            f"[{_STYLES[owner]}]{LABELS[owner]}[/{_STYLES[owner]}]",
            f"{s.mission_index[owner] + 1}/{total}",
            mission.describe(),
            f"{prog:g}/{mission.goal:g}",
        )
    for owner in sorted(s.completed_tracks):
        table.add_row(f"[{_STYLES[owner]}]{LABELS[owner]}[/{_STYLES[owner]}]", "", "[green]complete[/green]", "")
    return table


def _render_powers(engine: GameEngine) -> Columns:
    s = engine.state
    cells: list[Panel] = []
    for key in PowerKey:
        cur, need = engine.powerups.progress(s, key)
        charges = s.power_charges[key]
        body = Text()
        body.append(f"{command_for(key)}\n", style="dim")
        if charges:
            body.append(f"x{charges} ready", style="bold green")
        else:
            body.append(f"{cur}/{need}", style="yellow")
        cells.append(
            Panel(
                body,
                title=POWER_NAMES[key],
                border_style="green" if charges else _STYLES[key],
                width=18,
            )
        )
    return Columns(cells)


def _draw_run(engine: GameEngine, editor: LineEditor, status: str = "") -> None:
    console.clear()

    mode = "strict" if engine.strict else "lenient"
    body = Group(
        _render_header(engine),
        Text(""),
        _render_prompt(engine),
        Text(""),
        Columns([_render_chains(engine), _render_missions(engine)]),
        _render_powers(engine),
    )
    panel = Panel(
        body,
        title=f"[bold cyan]Word Chains[/bold cyan]  [dim]{mode}[/dim]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print(panel)

    recent = engine.state.recent[:8]
    if recent:
        console.print(Text(f"  Recent: {', '.join(recent)}", style="dim"))
    if status:
        console.print(Text.from_markup(f"  {status}"))
    console.print(Text(f"  > {editor.buffer}", style="bold"), end="")


def _draw_report(report: RunReport) -> None:
    console.clear()
    s = report.summary

    table = Table(show_header=False, box=rich.box.SIMPLE)
    table.add_column(style="dim")
    table.add_column(justify="right", style="bold yellow")
    table.add_row("Score", str(s.best_score))
    table.add_row("Words", str(s.total_words))
    table.add_row("Unique words", str(s.unique_words))
    table.add_row("Longest chain", str(s.longest_chain))
    table.add_row("Peak multiplier", f"x{s.highest_multiplier:.2f}")
    table.add_row("Switches", str(s.switches))
    table.add_row("LINKS earned / spent", f"{s.links_earned:g} / {s.links_spent:g}")
    if s.average_word_ms:
        table.add_row("Average speed", f"{s.average_word_ms / 1000:.1f}s per word")

    parts: list = [Align.center(Text(f"Game over: {report.reason}", style="bold red")), Align.center(table)]
    if report.submission is not None:
        style = "green" if report.submission.ok else "yellow"
        parts.append(Align.center(Text(report.submission.message, style=style)))

    console.print()
    console.print(
        Align.center(
            Panel(Group(*parts), title="[bold]RUN SUMMARY[/bold]", border_style="bold green", padding=(1, 2))
        )
    )
    console.print(Align.center(Text("\n  Press R to play again, Q to go back.\n", style="dim")))


# -- menu & stats screens -----------------------------------------------------


def _draw_menu(strict: bool) -> None:
    console.clear()

    modes = Text()
    for label, on in (("Strict", strict), ("Lenient", not strict)):
        if modes:
            modes.append("  ")
        modes.append(f" {label} ", style="bold green on #313244" if on else "dim")

    nav = Text("  ← →  change mode", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="dim bold")
    opts.append("  Stats    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(modes),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )
    panel = Panel(
        body,
        title="[bold]W O R D   C H A I N S[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_stats(store: StatsStore | None) -> None:
    console.clear()

    if store is None or not store.stats.sessions:
        content = Align.center(Text("  No runs recorded yet.", style="dim"))
    else:
        st = store.stats
        tables: list[Table] = []
        for title, values in (("Totals", st.totals), ("Records", st.records)):
            table = Table(title=title, title_style="bold cyan", box=rich.box.ROUNDED, border_style="dim")
            table.add_column("Stat", style="dim")
            table.add_column("Value", justify="right", style="yellow")
            for key, value in values.items():
                table.add_row(key, f"{value:g}")
            tables.append(table)
        content = Group(
            Align.center(Text(f"Sessions: {st.sessions}", style="bold")),
            Align.center(Columns(tables)),
        )

    console.print()
    console.print(Align.center(Panel(content, title="[bold]ALL-TIME STATS[/bold]", border_style="bright_blue", padding=(1, 2))))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loop ----------------------------------------------------------------


def _play_run(engine: GameEngine) -> bool:
    """Play one run.  Returns True if the player wants another."""
    engine.start()
    editor = LineEditor()
    status = f"[dim]{escape(HELP)}[/dim]"
    next_tick = time.monotonic() + 1.0
    dirty = True

    while engine.is_running:
        if dirty:
            _draw_run(engine, editor, status)
            dirty = False

        # Wait for input with a short timeout so the clock keeps ticking.
        key = get_key_timeout(0.25)
        now = time.monotonic()
        while now >= next_tick and engine.is_running:
            result = engine.tick()
            if result is not None:
                status = f"[bold red]{escape(result.message)}[/bold red]"
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
            status = f"[cyan]{escape(outcome.message)}[/cyan]"
            continue

        result = engine.submit(line)
        if result.accepted:
            status = f"[green]{escape(result.message)}[/green]"
        elif result.message:
            status = f"[yellow]{escape(result.message)}[/yellow]"

    if engine.report is not None:
        _draw_report(engine.report)

    while True:
        key = get_key()
        if key in ("r", "R", "enter"):
            return True
        if key in ("q", "Q", "escape", "interrupt"):
            return False


# -- menu loop ----------------------------------------------------------------


def _menu_loop(engine: GameEngine, store: StatsStore | None) -> None:
    while True:
        _draw_menu(engine.strict)
        key = get_key()

        if key in ("q", "Q", "escape", "interrupt"):
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key in ("left", "right"):
            engine.strict = not engine.strict
        elif key in ("1", "enter"):
            while _play_run(engine):
                pass
        elif key == "2":
            _draw_stats(store)


# -- public entry point -------------------------------------------------------


def run(engine: GameEngine, store: StatsStore | None = None) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(engine, store)
