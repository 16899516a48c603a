# Author      : Tyson Limato
# Date        : 2025-10-14
# File Name   : failure.py
import sys


def propagate(mgr, outcome, assignment: str):
    """
    Report a failed command and take the whole job down with its exit code.

    Parameters:
    -----------
    mgr : MPIManager
        Group handle of the failing rank.
    outcome : TaskOutcome
        The non-successful outcome returned by `execute`.
    assignment : str
        The command that failed.
    """
    print(f"Rank {mgr.rank}: command failed (exit code {outcome.exit_code}): {assignment}",
          file=sys.stderr, flush=True)
    print(f"system: {outcome.diagnostic}", file=sys.stderr, flush=True)
    mgr.abort(outcome.exit_code)
