"""
Candidate registry.

Maps case-insensitive candidate names to stable integer indices. Every later
stage (tally, pairs, lock graph) works on those indices only.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Optional

from .errors import CandidateNotFoundError, DuplicateCandidateError


@dataclass(frozen=True)
class Candidate:
    """A candidate participating in the election."""
    index: int
    name: str


class CandidateRegistry:
    """Append-only list of candidates, indexed by registration order."""

    def __init__(self, names: Optional[Iterable[str]] = None):
        self._candidates: list[Candidate] = []
        self._ids: dict[str, int] = {}
        for name in names or ():
            self.register(name)

    def register(self, name: str) -> int:
        """
        Add a candidate to the election.

        Args:
            name: Display name; uniqueness is checked case-insensitively

        Returns:
            The new candidate's index

        Raises:
            DuplicateCandidateError: If the name is already registered
            ValueError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise ValueError("Candidate names cannot be blank")

        key = name.lower()
        if key in self._ids:
            raise DuplicateCandidateError(name)

        index = len(self._candidates)
        self._ids[key] = index
        self._candidates.append(Candidate(index, name))
        return index

    def lookup(self, name: str) -> int:
        """Get a candidate's index by name (case-insensitive)."""
        try:
            return self._ids[name.strip().lower()]
        except KeyError:
            raise CandidateNotFoundError(name) from None

    def contains(self, name: str) -> bool:
        return name.strip().lower() in self._ids

    def count(self) -> int:
        return len(self._candidates)

    def candidate(self, index: int) -> Candidate:
        if not 0 <= index < len(self._candidates):
            raise CandidateNotFoundError(str(index))
        return self._candidates[index]

    @property
    def names(self) -> list[str]:
        return [c.name for c in self._candidates]

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)
