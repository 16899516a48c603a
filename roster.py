# Author      : Tyson Limato
# Date        : 2025-10-14
# File Name   : roster.py
import sys
from dataclasses import dataclass, field

from config import Settings

WHITESPACE = " \t\r\n"


@dataclass
class Roster:
    """
    The cmdfile entries kept by rank 0.

    Attributes:
    -----------
    entries : list
        Commands in file order; entry i belongs to rank i.
    dropped : int
        Qualifying lines found past the limit. They are counted, never kept.
    truncated : int
        Entries cut down to the line length limit.
    """
    entries: list = field(default_factory=list)
    dropped: int = 0
    truncated: int = 0

    def assignment_for(self, rank: int) -> str:
        return self.entries[rank] if rank < len(self.entries) else ""


def parse_roster(lines, limit: int, max_line: int = None) -> Roster:
    """
    Keep the first `limit` non-blank, non-comment lines of `lines`.

    Each line is stripped of surrounding spaces, tabs, CR and LF first; lines
    that end up empty or start with '#' are skipped wherever they appear.
    `max_line` is a limit in UTF-8 bytes, as the line would reach the shell.
    """
    roster = Roster()
    for line in lines:
        cmd = line.strip(WHITESPACE)
        if not cmd or cmd.startswith("#"):
            continue
        if len(roster.entries) >= limit:
            roster.dropped += 1
            continue
        if max_line is not None:
            raw = cmd.encode("utf-8", "surrogateescape")
            if len(raw) > max_line:
                # a multi-byte character split at the cut comes back as escaped bytes
                cmd = raw[:max_line].decode("utf-8", "surrogateescape")
                roster.truncated += 1
        roster.entries.append(cmd)
    return roster


def read_roster(path: str, limit: int, max_line: int = None) -> Roster:
    # surrogateescape hands undecodable bytes back to the shell untouched
    # only LF ends a line; a lone CR stays inside the command
    with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
        return parse_roster(f, limit, max_line)


def distribute(mgr, path: str, settings: Settings = None) -> str:
    """
    Give every rank its line of the cmdfile at `path` and return this rank's.

    Rank 0 reads the whole file before sending anything, keeps entry 0 and
    sends entry i (or "" when the file ran out) to rank i. Every other rank
    blocks on a single receive from rank 0. If rank 0 cannot open the file the
    whole job is aborted with code 1, since the other ranks would otherwise
    wait forever.

    Parameters:
    -----------
    mgr : MPIManager
        Group handle of this rank.
    path : str
        The cmdfile.
    settings : Settings
        Line length and entry count limits.

    Returns:
    --------
    str
        The command this rank must run, possibly empty.
    """
    if not mgr.is_coordinator:
        return mgr.recv_assignment(source=0)

    settings = settings or Settings()
    limit = min(mgr.size, settings.max_commands)
    try:
        roster = read_roster(path, limit, settings.max_line)
    except OSError as e:
        print(f"open: {e.strerror or e}", file=sys.stderr, flush=True)
        print(f"file not found: '{path}'", file=sys.stderr, flush=True)
        mgr.abort(1)
        # Comm.Abort never returns; re-raise in case the communicator does
        raise

    if roster.dropped:
        num_commands = len(roster.entries) + roster.dropped
        if limit < mgr.size:
            print(f"num_commands(={num_commands}) is larger than max_commands(={limit}), "
                  f"extra commands ignored!", flush=True)
        else:
            print(f"num_commands(={num_commands}) is larger than num_ranks(={mgr.size}), "
                  f"extra commands ignored!", flush=True)
    if roster.truncated:
        print(f"[WARN] {roster.truncated} command(s) longer than {settings.max_line} "
              f"bytes were truncated", flush=True)

    for i in range(1, mgr.size):
        mgr.send_assignment(roster.assignment_for(i), dest=i)
    return roster.assignment_for(0)
