"""
Pairwise margin tally.

The margin matrix is a plain list of lists indexed by candidate index:
matrix[i][j] is the number of ballots ranking i ahead of j minus the number
ranking j ahead of i, so matrix[i][j] == -matrix[j][i].
"""

from collections.abc import Iterable, Sequence

import pandas as pd

MarginMatrix = list[list[int]]


def empty_matrix(candidate_count: int) -> MarginMatrix:
    return [[0] * candidate_count for _ in range(candidate_count)]


def tally(ballots: Iterable[Sequence[int]], candidate_count: int) -> MarginMatrix:
    """
    Build the margin matrix from complete ballots.

    Each ballot contributes +1 to matrix[a][b] and -1 to matrix[b][a] for
    every candidate a ranked ahead of b. The result does not depend on the
    order of the ballots.

    Args:
        ballots: Rankings of candidate indices, most preferred first
        candidate_count: Number of registered candidates

    Returns:
        Square margin matrix
    """
    matrix = empty_matrix(candidate_count)

    for ballot in ballots:
        for p in range(len(ballot) - 1):
            preferred = ballot[p]
            for q in range(p + 1, len(ballot)):
                matrix[preferred][ballot[q]] += 1
                matrix[ballot[q]][preferred] -= 1

    return matrix


def merge_tallies(*matrices: MarginMatrix) -> MarginMatrix:
    """Sum margin matrices tallied from disjoint groups of ballots."""
    if not matrices:
        raise ValueError("merge_tallies needs at least one matrix")

    size = len(matrices[0])
    if any(len(m) != size for m in matrices):
        raise ValueError("Cannot merge margin matrices of different sizes")

    merged = empty_matrix(size)
    for m in matrices:
        for i in range(size):
            row = merged[i]
            for j, margin in enumerate(m[i]):
                row[j] += margin
    return merged


# =============================================================================
# Reporting
# =============================================================================

def matchup_frame(matrix: MarginMatrix, names: Sequence[str]) -> pd.DataFrame:
    """
    Label the margin matrix with candidate names.

    Entry (i, j) is the margin of victory of candidate i over candidate j
    (positive means i beats j more often than j beats i). The diagonal is
    left empty.

    Args:
        matrix: Margin matrix from tally()
        names: Display names in registry order

    Returns:
        DataFrame with matchup margins
    """
    if len(names) != len(matrix):
        raise ValueError(
            f"Got {len(names)} names for a {len(matrix)}x{len(matrix)} matrix"
        )

    matrix_data = []
    for i, row in enumerate(matrix):
        matrix_data.append([None if i == j else margin for j, margin in enumerate(row)])

    return pd.DataFrame(
        matrix_data,
        index=list(names),
        columns=list(names)
    ).astype("Int64")


def borda_scores(matchup_matrix: pd.DataFrame) -> dict[str, int]:
    """
    Compute modified Borda scores from the matchup matrix.

    The Borda score for a candidate is the sum of their margins
    against all other candidates.
    """
    # sum() skips the empty diagonal
    totals = matchup_matrix.sum(axis=1)
    return {candidate: int(totals[candidate]) for candidate in matchup_matrix.index}
