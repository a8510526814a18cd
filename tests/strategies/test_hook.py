"""Tests for CloneHookStrategy and the Cloneable protocol."""

from clonekit import Cloneable, CloneHookStrategy


class Connection:
    """Keeps its address but never its live socket."""

    def __init__(self, address: str) -> None:
        self.address = address
        self.socket = object()
        self.peers: list["Connection"] = []

    def __clone__(self, context) -> "Connection":
        copy = Connection.__new__(Connection)
        context.register_visited(self, copy)
        copy.address = self.address
        copy.socket = None
        copy.peers = context.proceed(self.peers)
        return copy


def test_protocol_detection():
    assert isinstance(Connection("a"), Cloneable)
    assert CloneHookStrategy().supports(Connection)
    assert not CloneHookStrategy().supports(dict)


def test_hook_result_used(cloner):
    original = Connection("db:5432")

    clone = cloner.deep_clone(original)

    assert clone.address == "db:5432"
    assert clone.socket is None
    assert original.socket is not None


def test_hook_participates_in_cycles(cloner):
    a = Connection("a")
    b = Connection("b")
    a.peers.append(b)
    b.peers.append(a)

    clone = cloner.deep_clone(a)

    assert clone.peers[0].peers[0] is clone
    assert clone.peers[0] is not b
