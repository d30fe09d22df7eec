"""Exceptions raised by the graph model, the priority queue and the layouts.

All of them are raised synchronously at the point of misuse. Where a
builtin exception describes the same failure, the class also derives from
it so callers can catch either.
"""

from __future__ import annotations


class LayoutError(Exception):
    """Base class for every force-lab error."""


class GraphError(LayoutError):
    """A graph mutation or query precondition was violated."""


class DuplicateNode(GraphError, ValueError):
    """A node with this label already exists."""


class DuplicateEdge(GraphError, ValueError):
    """The two nodes are already adjacent."""


class SelfLoop(GraphError, ValueError):
    """An edge from a node to itself was requested."""


class UnknownNode(GraphError, KeyError):
    """No node carries this label."""

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class AlreadyFinished(LayoutError, RuntimeError):
    """step() was called on an algorithm that has already terminated."""


class QueueError(LayoutError):
    """Priority queue misuse."""


class EmptyQueue(QueueError, IndexError):
    """The queue holds no entries."""


class UnknownId(QueueError, KeyError):
    """No queued entry carries this id."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class InsufficientNodes(LayoutError, ValueError):
    """More centers were requested than the graph has nodes."""


class DegenerateSystem(LayoutError, ArithmeticError):
    """The Newton step's linear system is singular; the move was skipped."""
