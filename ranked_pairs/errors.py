"""
Errors raised while running a ranked pairs election.

Everything derives from TidemanError so callers can catch the whole family.
Configuration and ballot errors also derive from ValueError, and a failed
candidate lookup from KeyError, so code that already handles those builtins
keeps working.
"""


class TidemanError(Exception):
    """Base class for every error raised by this package."""


# =============================================================================
# Configuration
# =============================================================================

class ConfigurationError(TidemanError, ValueError):
    """The election cannot start (e.g. fewer than two candidates)."""


class DuplicateCandidateError(ConfigurationError):
    """Attempted to register a candidate that already exists."""

    def __init__(self, name: str):
        super().__init__(f"Can't add candidate \"{name}\" because it already exists")
        self.name = name


class CandidateNotFoundError(TidemanError, KeyError):
    """The given candidate name or index does not exist."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        # KeyError would quote the whole message
        return f"The candidate \"{self.name}\" was not found"


# =============================================================================
# Ballots
# =============================================================================

class BallotError(TidemanError, ValueError):
    """A ballot was rejected. Nothing from it has been recorded."""


class UnknownCandidateError(BallotError):
    def __init__(self, name: str):
        super().__init__("That candidate does not exist")
        self.name = name


class DuplicateVoteError(BallotError):
    def __init__(self, name: str):
        super().__init__("You already voted for that candidate")
        self.name = name


class IncompleteBallotError(BallotError):
    def __init__(self, ranked: int, expected: int):
        super().__init__(
            f"A ballot must rank all {expected} candidates, got {ranked}"
        )
        self.ranked = ranked
        self.expected = expected


# =============================================================================
# Tabulation
# =============================================================================

class CycleError(TidemanError):
    """A graph lock created a cycle. Only ever raised by LockGraph.try_lock."""

    def __init__(self, winner: int, loser: int):
        super().__init__(f"Locking {winner} -> {loser} would create a cycle")
        self.winner = winner
        self.loser = loser


class NoWinnerError(TidemanError):
    """
    The lock graph has no single undefeated candidate with a locked victory.

    `candidates` holds the undefeated candidate indices that were considered.
    """

    def __init__(self, message: str, candidates: tuple[int, ...] = ()):
        super().__init__(message)
        self.candidates = candidates
