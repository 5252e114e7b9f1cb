"""
Argv preprocessor for forgiving CLI flag and command handling.

Normalizes sys.argv before Typer parses it, handling common user patterns:
- ``recyclebin --version`` → ``recyclebin version``
- ``recyclebin help restore`` → ``recyclebin restore --help``
- ``recyclebin statistics`` → ``recyclebin stats``
- ``recyclebin list --debug`` → ``recyclebin --debug list``
"""

_GLOBAL_FLAGS = {"--debug"}
_GLOBAL_OPTIONS = {"--bin-dir"}

_VERSION_FLAGS = ("--version", "-V", "-v")

# Alternate command spellings accepted for compatibility
COMMAND_ALIASES = {
    "statistics": "stats",
    "auto-cleanup": "cleanup",
    "check-quota": "quota",
    "purgecorrupted": "purge",
    "purge_corrupted": "purge",
}


def preprocess_argv(argv: list[str]) -> list[str]:
    """Normalize CLI arguments for Typer compatibility.

    Applied rules (in order):
    1. Global flags and options hoisted before the subcommand
    2. ``--version`` / ``-V`` / ``-v`` as the command → ``version`` subcommand
    3. ``help`` pseudo-command → ``--help`` appended to subcommands
    4. Command aliases replaced by their canonical name
    """
    if not argv:
        return argv

    hoisted, rest = _hoist_global_flags(argv)
    if not rest:
        return hoisted

    # Rule 2: --version / -V / -v → version subcommand
    if rest[0] in _VERSION_FLAGS:
        return [*hoisted, "version"]

    # Rule 3: help pseudo-command → --help
    if rest[0] == "help":
        return [*hoisted, *_rewrite_help(rest[1:])]

    # Rule 4: aliases
    command = COMMAND_ALIASES.get(rest[0], rest[0])
    return [*hoisted, command, *rest[1:]]


def _rewrite_help(rest: list[str]) -> list[str]:
    """Rewrite ``help [subcmd]`` into ``[subcmd] --help``."""
    for token in rest:
        if token.startswith("-") or token == "help":
            continue
        return [COMMAND_ALIASES.get(token, token), "--help"]
    return ["--help"]


def _hoist_global_flags(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split global flags (``--debug``, ``--bin-dir DIR``) from the rest.

    Tokens after a ``--`` separator are never hoisted.
    """
    hoisted: list[str] = []
    rest: list[str] = []
    seen: set[str] = set()
    i = 0
    while i < len(argv):
        token = argv[i]
        if token == "--":
            rest.extend(argv[i:])
            break
        if token in _GLOBAL_FLAGS:
            if token not in seen:
                hoisted.append(token)
                seen.add(token)
            # Drop duplicates entirely
        elif token in _GLOBAL_OPTIONS and i + 1 < len(argv):
            hoisted.extend([token, argv[i + 1]])
            i += 1
        elif token.split("=", 1)[0] in _GLOBAL_OPTIONS:
            hoisted.append(token)
        else:
            rest.append(token)
        i += 1
    return hoisted, rest
