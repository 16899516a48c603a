# Author      : Tyson Limato
# Date        : 2025-10-14
# File Name   : resolver.py
import os
from dataclasses import dataclass

from config import Settings


@dataclass(frozen=True)
class Resolution:
    """
    What a rank has to do, as decided from the command line argument alone.

    Attributes:
    -----------
    assignment : str
        Command line to run. Empty means this rank has nothing to do.
    kind : str
        "script" for pattern mode, "command" for cmdfile entries.
    target : str
        What the progress line names; the assignment itself when empty.
    needs_roster : bool
        True when the argument names a cmdfile and the assignment still has
        to come from rank 0.
    """
    assignment: str = ""
    kind: str = "command"
    target: str = ""
    needs_roster: bool = False

    @classmethod
    def roster(cls) -> "Resolution":
        return cls(needs_roster=True)


def script_path_for(pattern: str, rank: int, wildcard: str = "*") -> str:
    # only the first wildcard is replaced, the rest stays in the suffix
    prefix, _, suffix = pattern.partition(wildcard)
    return f"{prefix}{rank}{suffix}"


def resolve(arg: str, rank: int, settings: Settings = None) -> Resolution:
    """
    Decide what `rank` must execute for the invocation argument `arg`.

    If `arg` contains the wildcard it is a script pattern: the rank number is
    substituted and the script is run with the interpreter when it exists. A
    missing script is reported and leaves the rank idle. Without a wildcard
    `arg` is a cmdfile and the caller has to fetch the assignment from the
    roster distribution.
    """
    settings = settings or Settings()
    if settings.wildcard not in arg:
        return Resolution.roster()

    scriptfile = script_path_for(arg, rank, settings.wildcard)
    if not os.path.exists(scriptfile):
        print(f"[INFO] script not found: {scriptfile}", flush=True)
        return Resolution(kind="script")

    return Resolution(
        assignment=f"{settings.interpreter} {scriptfile}",
        kind="script",
        target=scriptfile,
    )
