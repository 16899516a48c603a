# ------------------------------------------------------------
# Author      : Tyson Limato
# Date        : 2025-10-14
# File Name   : rank_run.py
# Description : Runs a batch of unrelated serial jobs in parallel, one per
#               MPI rank, inside an already allocated MPI job.
#
# Usage       : mpiexec -n 10 python rank_run.py cmdfile
#               mpiexec -n 10 python rank_run.py 'wgrib_*.sh'
#
#   cmdfile       one shell command per line; blank lines and lines starting
#                 with '#' are skipped. Line i runs on rank i, ranks without a
#                 line stay idle, lines past the number of ranks are ignored.
#   script_pattern  the '*' is replaced by the rank, so rank 3 runs
#                 'bash wgrib_3.sh' if that file exists.
#
# If any command exits non-zero the whole job is aborted with that exit code.
#
# Dependencies:
#       - mpi4py
#
# Environment:
#   RANK_RUN_MAX_LINE, RANK_RUN_MAX_COMMANDS, RANK_RUN_WILDCARD,
#   RANK_RUN_INTERPRETER (see config.py)
# ------------------------------------------------------------
import argparse
import sys

from config import Settings
from executor import execute
from failure import propagate
from mpiMGR import MPIManager
from resolver import resolve
from roster import distribute


class UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="rank_run", add_help=False,
                     usage="%(prog)s <cmdfile | script_pattern>")
    parser.add_argument('target', help="cmdfile, or a script pattern containing '*'")
    return parser


def main(argv=None, mpi_mgr=None, settings=None) -> int:
    mpi_mgr = mpi_mgr or MPIManager()
    parser = build_parser()
    try:
        argv = sys.argv[1:] if argv is None else list(argv)
        # "--" keeps names like "-jobs" positional
        args = parser.parse_args(["--", *argv])
        settings = settings or Settings.from_env()
        settings.validate()
    except (UsageError, ValueError) as e:
        # every rank sees the same argv, so all of them stop here
        if mpi_mgr.is_coordinator:
            print(f"Usage: {parser.prog} <cmdfile | script_pattern>", file=sys.stderr)
            print(f"{parser.prog}: error: {e}", file=sys.stderr, flush=True)
        return 1

    res = resolve(args.target, mpi_mgr.rank, settings)
    if res.needs_roster:
        assignment = distribute(mpi_mgr, args.target, settings)
        outcome = execute(assignment, mpi_mgr.rank, "command")
    else:
        assignment = res.assignment
        outcome = execute(assignment, mpi_mgr.rank, res.kind, res.target)

    if not outcome.ok:
        propagate(mpi_mgr, outcome, assignment)
        return outcome.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())
