# Author      : Tyson Limato
# Date        : 2025-10-14
# File Name   : mpiMGR.py

ASSIGNMENT_TAG = 0


class MPIManager:
    """
    A utility class to handle the MPI operations of a rank_run job using `mpi4py`.

    Parameters:
    -----------
    comm : object
        Communicator to use. Defaults to `MPI.COMM_WORLD`; anything exposing the
        mpi4py `Get_rank`, `Get_size`, `send`, `recv` and `Abort` methods works.

    Methods:
    --------
    send_assignment(assignment, dest)
        Sends one command string from this rank to rank `dest`.

    recv_assignment(source=0)
        Receives the command string addressed to this rank.

    abort(errorcode)
        Terminates every rank of the job with `errorcode`.
    """

    def __init__(self, comm=None):
        if comm is None:
            from mpi4py import MPI
            comm = MPI.COMM_WORLD
        # Initialize the MPI communicator
        self.comm = comm
        # Get the rank (ID) of the current process
        self.rank = self.comm.Get_rank()
        # Get the total number of processes
        self.size = self.comm.Get_size()

    @property
    def is_coordinator(self) -> bool:
        return self.rank == 0

    def send_assignment(self, assignment: str, dest: int):
        """
        Blocking point-to-point send of a single assignment.

        Parameters:
        -----------
        assignment : str
            The command line (possibly empty) that rank `dest` must run.
        dest : int
            The receiving rank.
        """
        self.comm.send(assignment, dest=dest, tag=ASSIGNMENT_TAG)

    def recv_assignment(self, source: int = 0) -> str:
        """
        Blocking receive of exactly one assignment from `source`.

        Returns:
        --------
        str
            The assignment, verbatim. An empty string means "nothing to run".
        """
        return self.comm.recv(source=source, tag=ASSIGNMENT_TAG)

    def abort(self, errorcode: int):
        """
        Abort the whole job, not just this rank. The runtime reports
        `errorcode` as the job's termination status.
        """
        self.comm.Abort(errorcode)
