"""
pmswitch.translator.engine — Rewrite a command for the preferred manager.

``translate()`` tries three stages, first match wins:

1.  **Runner prefixes** — ``npx``, ``pnpx``, ``pnpm dlx``, ``bunx`` and
    ``yarn dlx`` are swapped for the target's runner; everything after
    the prefix is kept byte-for-byte.
2.  **Manager verbs** — ``npm``, ``pnpm``, ``yarn`` and ``bun`` commands
    are re-tokenized and their subcommand is mapped through the rule
    table (``install`` ↔ ``add``, ``uninstall`` ↔ ``remove``, bare yarn
    scripts → ``run <script>``).
3.  **Global installs** — a ``-g`` / ``--global`` flag anywhere in the
    arguments switches to the target's own global-install form.

Matching is purely syntactic: no quoting, pipes or multiple commands.
The engine is pure and never raises; "nothing to do" is ``None``.
"""

from __future__ import annotations

from pmswitch.translator.base import PackageManager, split_command

NPM = PackageManager.NPM
PNPM = PackageManager.PNPM
YARN = PackageManager.YARN
BUN = PackageManager.BUN

# (prefix, owner) in match order. "pnpm dlx " must be tried before the
# plain "pnpm " verb, which happens in the next stage anyway.
_RUNNER_PREFIXES: list[tuple[str, PackageManager]] = [
    ("npx ", NPM),
    ("pnpx ", PNPM),
    ("pnpm dlx ", PNPM),
    ("bunx ", BUN),
    ("yarn dlx ", YARN),
]

_VERB_PREFIXES: list[tuple[str, PackageManager]] = [
    ("npm ", NPM),
    ("pnpm ", PNPM),
    ("yarn ", YARN),
    ("bun ", BUN),
]

# npm → pnpm / yarn / bun
_FROM_NPM: dict[str, str] = {
    "install": "add",
    "i": "add",
    "uninstall": "remove",
}

# pnpm / yarn / bun → npm
_TO_NPM: dict[str, str] = {
    "add": "install",
    "remove": "uninstall",
}

# Yarn subcommands that are *not* user scripts.  Anything else after a
# bare ``yarn`` names a script and needs an explicit ``run`` elsewhere,
# including ``run`` itself (``yarn run build`` -> ``npm run run build``).
_YARN_BUILTINS = frozenset({"add", "remove", "install", "uninstall"})

_GLOBAL_INSTALL: dict[PackageManager, str] = {
    NPM: "npm install -g",
    PNPM: "pnpm add -g",
    YARN: "yarn global add",
    BUN: "bun add -g",
}

# "--global" is stripped first; removing "-g" first would leave "-lobal".
_GLOBAL_FLAGS = ("--global", "-g")


def _name(pm: PackageManager | str) -> str:
    return pm.value if isinstance(pm, PackageManager) else pm


def _with_args(head: str, args: str) -> str:
    """Join *head* and *args* with a single space, or return *head* if no args."""
    return f"{head} {args}" if args else head


# ---------------------------------------------------------------------------
# Stage 1: runners
# ---------------------------------------------------------------------------


def runner_command(target: PackageManager | str, args: str) -> str:
    """Return *args* prefixed with the target's runner (``npx`` if unknown)."""
    pm = PackageManager.parse(target)
    prefix = pm.runner if pm is not None else NPM.runner
    return f"{prefix}{args}"


def translate_runner(command: str, target: PackageManager) -> str | None:
    """Swap a runner prefix for the target's own, or return ``None``.

    A command that already uses one of the target's runners is left
    alone, which makes translating a translated command a no-op.
    """
    for prefix, owner in _RUNNER_PREFIXES:
        if command.startswith(prefix) and owner != target:
            return runner_command(target, command[len(prefix):])
    return None


# ---------------------------------------------------------------------------
# Stage 2: manager verbs
# ---------------------------------------------------------------------------


def translate_package_manager(command: str, target: PackageManager) -> str | None:
    """Rewrite an ``npm``/``pnpm``/``yarn``/``bun`` command for *target*."""
    for prefix, owner in _VERB_PREFIXES:
        if command.startswith(prefix) and owner != target:
            _verb, subcommand, args = split_command(command)
            if subcommand is None:
                return None
            return translate_subcommand(owner, target, subcommand, args)
    return None


def translate_subcommand(
    from_pm: PackageManager | str,
    to_pm: PackageManager | str,
    subcommand: str,
    args: str = "",
) -> str:
    """Map *subcommand* from one manager to another and rebuild the command.

    Parameters
    ----------
    from_pm, to_pm :
        Source and target managers.
    subcommand :
        The second token of the source command (``install``, ``add``, …).
    args :
        Remaining tokens joined by single spaces.
    """
    src, dst = _name(from_pm), _name(to_pm)

    if src == "npm" and dst in ("pnpm", "yarn", "bun") and subcommand in _FROM_NPM:
        translated = _FROM_NPM[subcommand]
    elif src in ("pnpm", "yarn", "bun") and dst == "npm" and subcommand in _TO_NPM:
        translated = _TO_NPM[subcommand]
    elif src == "yarn" and subcommand not in _YARN_BUILTINS:
        if dst == "yarn":
            translated = subcommand
        else:
            return _with_args(f"{dst} run {subcommand}", args)
    else:
        translated = subcommand

    if any(flag in args for flag in _GLOBAL_FLAGS):
        clean_args = args
        for flag in _GLOBAL_FLAGS:
            clean_args = clean_args.replace(flag, "")
        clean_args = clean_args.strip()

        target = PackageManager.parse(dst)
        if target is not None:
            return _with_args(_GLOBAL_INSTALL[target], clean_args)
        return _with_args(f"{dst} {translated}", args)

    return _with_args(f"{dst} {translated}", args)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def translate(command: str, target: PackageManager | str) -> str | None:
    """Return *command* rewritten for *target*, or ``None`` if not applicable.

    Parameters
    ----------
    command : str
        Candidate text, typically the full clipboard contents.  Surrounding
        whitespace is ignored; multi-line text is never a command.
    target : PackageManager | str
        Preferred manager, matched exactly.  Any other name (``"deno"``,
        ``"PNPM"``) makes every translation a no-op.

    Returns
    -------
    str | None
        The rewritten command, or ``None`` when nothing applies.
    """
    pm = PackageManager.parse(target)
    if pm is None:
        return None

    command = command.strip()
    if not command or "\n" in command or "\r" in command:
        return None

    translated = translate_runner(command, pm)
    if translated is not None:
        return translated

    return translate_package_manager(command, pm)
