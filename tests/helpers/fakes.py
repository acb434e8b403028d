"""In-memory collaborators for resolver, service, and server tests."""

from typing import Any

from assignment_questions.interfaces import AssignmentSink, IdGenerator


class SequenceIdGenerator(IdGenerator):
    """Deterministic ids: ``id-1``, ``id-2``, ...

    ``short_by`` makes ``generate_ids`` return that many fewer ids than
    requested so the on-demand fallback can be exercised.
    """

    def __init__(self, prefix: str = "id", short_by: int = 0):
        self.prefix = prefix
        self.short_by = short_by
        self.counter = 0
        self.batch_calls: list[int] = []
        self.single_calls = 0

    def _next(self) -> str:
        self.counter += 1
        return f"{self.prefix}-{self.counter}"

    def generate_ids(self, count: int) -> list[str]:
        self.batch_calls.append(count)
        return [self._next() for _ in range(max(count - self.short_by, 0))]

    def generate_id(self) -> str:
        self.single_calls += 1
        return self._next()


class FixedIdGenerator(IdGenerator):
    """Hands out a fixed list of ids in order."""

    def __init__(self, ids: list[str]):
        self._ids = list(ids)

    def generate_ids(self, count: int) -> list[str]:
        taken, self._ids = self._ids[:count], self._ids[count:]
        return taken


class FailingIdGenerator(IdGenerator):
    """Simulates an unavailable id service."""

    def generate_ids(self, count: int) -> list[str]:
        raise RuntimeError("id service unavailable")


class MemorySink(AssignmentSink):
    """Keeps saved documents in a dict keyed by document id."""

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}
        self.saves: list[tuple[str | None, dict[str, Any]]] = []

    async def save(self, record: dict[str, Any], document_id: str | None = None) -> str:
        self.saves.append((document_id, record))
        doc_id = document_id or f"doc-{len(self.documents) + 1}"
        self.documents[doc_id] = record
        return doc_id


class FailingSink(AssignmentSink):
    async def save(self, record: dict[str, Any], document_id: str | None = None) -> str:
        raise ConnectionError("database unavailable")
