"""Abstract interfaces for the resolver's external collaborators.

These ABCs define the contract that external implementations must fulfil.
The resolver itself performs no I/O; identifier minting and persistence are
injected so the algorithm stays deterministic under test.

Typical integration flow::

    resolver = QuestionGraphResolver(UuidIdGenerator())
    result = resolver.resolve(request_body["content"])

    sink: AssignmentSink = SqlAssignmentSink(db)
    doc_id = await sink.save(record, document_id=None)
"""

from abc import ABC, abstractmethod
from typing import Any


class IdGenerator(ABC):
    """Interface for minting permanent question identifiers.

    Implementations must return globally unique strings.  The resolver asks
    for a pool sized to the input up front and falls back to
    :meth:`generate_id` for any slot the pool cannot fill.
    """

    @abstractmethod
    def generate_ids(self, count: int) -> list[str]:
        """Return ``count`` fresh identifiers.

        Parameters
        ----------
        count:
            Number of ids requested.  Must tolerate ``0`` (return ``[]``).

        Returns
        -------
        list[str]
            Unique identifiers.  Returning fewer than ``count`` is tolerated
            by the resolver, which mints the remainder one at a time.
        """
        ...

    def generate_id(self) -> str:
        """Return a single fresh identifier (on-demand fallback)."""
        ids = self.generate_ids(1)
        if not ids:
            raise RuntimeError(f"{type(self).__name__} returned no identifier")
        return ids[0]


class AssignmentSink(ABC):
    """Interface for durable storage of finalised assignment documents."""

    @abstractmethod
    async def save(self, record: dict[str, Any], document_id: str | None = None) -> str:
        """Persist an assignment document.

        Parameters
        ----------
        record:
            The complete assignment document, including the resolved
            ``questions`` array and the three projected metadata ids.
        document_id:
            Optional caller-supplied document identifier.  When given, the
            document with that id is created or overwritten.

        Returns
        -------
        str
            The effective stored document identifier.
        """
        ...
