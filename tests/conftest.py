"""Shared test fixtures: an in-process stand-in for an MPI communicator."""

from __future__ import annotations

from collections import defaultdict, deque

import pytest

from mpiMGR import MPIManager


class Aborted(Exception):
    def __init__(self, errorcode):
        super().__init__(errorcode)
        self.errorcode = errorcode


class FakeWorld:
    """A group of `size` fake ranks sharing one set of mailboxes."""

    def __init__(self, size):
        self.size = size
        self.mailboxes = defaultdict(deque)
        self.sent = []
        self.aborts = []

    def comm(self, rank):
        return FakeComm(self, rank)

    def manager(self, rank):
        return MPIManager(comm=self.comm(rank))


class FakeComm:
    def __init__(self, world, rank):
        self.world = world
        self.rank = rank

    def Get_rank(self):
        return self.rank

    def Get_size(self):
        return self.world.size

    def send(self, obj, dest, tag=0):
        self.world.sent.append((self.rank, dest, tag, obj))
        self.world.mailboxes[(self.rank, dest, tag)].append(obj)

    def recv(self, source=0, tag=0):
        box = self.world.mailboxes[(source, self.rank, tag)]
        if not box:
            raise AssertionError(f"rank {self.rank} would block forever on recv")
        return box.popleft()

    def Abort(self, errorcode=0):
        self.world.aborts.append((self.rank, errorcode))
        raise Aborted(errorcode)


@pytest.fixture()
def world():
    def _make(size):
        return FakeWorld(size)

    return _make


@pytest.fixture()
def write_cmdfile(tmp_path):
    def _write(*lines, name="cmdfile"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
