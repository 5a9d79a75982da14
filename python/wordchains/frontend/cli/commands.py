"""Slash commands typed into the word prompt, shared by the CLI frontends."""

from __future__ import annotations

from dataclasses import dataclass

from wordchains.engine.gameplay import GameEngine
from wordchains.models.categories import POWER_NAMES, PowerKey

# Short command name for every power-up.
POWER_COMMANDS: dict[str, PowerKey] = {
    "nuke": PowerKey.COUNTRY,
    "freeze": PowerKey.NAME,
    "surge": PowerKey.ANIMAL,
    "life": PowerKey.FOOD,
    "sponsor": PowerKey.BRAND,
    "montage": PowerKey.SCREEN,
    "mirror": PowerKey.SAME,
}

HELP = (
    "Type a word and press Enter.  "
    "/nuke /freeze /surge /life /sponsor /montage /mirror use a power-up, "
    "/strict toggles dictionary checks, /quit ends the run, ?word shows categories."
)


@dataclass
class CommandOutcome:
    message: str
    quit: bool = False


def command_for(key: PowerKey) -> str:
    for name, power in POWER_COMMANDS.items():
        if power is key:
            return f"/{name}"
    return f"/use {key}"


def run_command(engine: GameEngine, line: str) -> CommandOutcome:
    """Execute a ``/command`` line against *engine*."""
    parts = line[1:].strip().lower().split()
    if not parts:
        return CommandOutcome(HELP)
    name, args = parts[0], parts[1:]

    if name in ("quit", "q", "end"):
        return CommandOutcome("Run ended.", quit=True)
    if name in ("help", "h", "?"):
        return CommandOutcome(HELP)
    if name == "strict":
        engine.strict = not engine.strict
        return CommandOutcome(f"Strict dictionary {'on' if engine.strict else 'off'}.")

    if name == "use" and args:
        key = POWER_COMMANDS.get(args[0])
        if key is None:
            try:
                key = PowerKey(args[0])
            except ValueError:
                key = None
    else:
        key = POWER_COMMANDS.get(name)

    if key is None:
        return CommandOutcome(f"Unknown command /{name}.  {HELP}")

    message = engine.use_power(key)
    if message is None:
        return CommandOutcome(f"No {POWER_NAMES[key]} charges available.")
    return CommandOutcome(message)
