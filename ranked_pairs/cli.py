"""
Command-line front end for ranked pairs elections.

Candidates come from the command line; ballots are either typed in at the
terminal, one rank at a time, or read from a CSV file.

Usage:
    ranked-pairs Alice Bob Carol
    ranked-pairs Alice Bob Carol --ballots ballots.csv --verbose
    ranked-pairs Alice Bob Carol --ballots ballots.csv --matrix-out matchups.csv
"""

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional

from .ballots import BallotStore, load_ballots_csv
from .election import MIN_CANDIDATES, Election, TabulationResult
from .errors import BallotError, TidemanError

EXIT_ERROR = 1
EXIT_NO_WINNER = 3

Prompt = Callable[[str], str]


# =============================================================================
# Terminal Input
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ranked-pairs",
        description="Find the winner of an election using the Ranked Pairs (Tideman) method",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    ranked-pairs Alice Bob Carol
    ranked-pairs Alice Bob Carol --ballots ballots.csv
    ranked-pairs Alice Bob Carol --ballots ballots.csv --invalid-ballots skip --verbose
        """
    )

    parser.add_argument(
        "candidates",
        nargs="+",
        metavar="CANDIDATE",
        help=f"Candidate names (at least {MIN_CANDIDATES})"
    )

    parser.add_argument(
        "--ballots", "-b",
        type=Path,
        default=None,
        help="CSV file with one ballot per row (default: read ballots from the terminal)"
    )

    parser.add_argument(
        "--invalid-ballots",
        choices=["error", "skip"],
        default="error",
        help="What to do with invalid rows in the ballot file: error (fail), skip (leave out)"
    )

    parser.add_argument(
        "--matrix-out", "-m",
        type=Path,
        default=None,
        help="Write the pairwise matchup matrix to this CSV file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress information"
    )

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse the command line.

    Exits with a usage message when fewer than two candidates are given.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.candidates) < MIN_CANDIDATES:
        parser.error(f"Minimum number of candidates is {MIN_CANDIDATES}")

    return args


def read_candidate_names(argv: Optional[Sequence[str]] = None) -> list[str]:
    """Candidate names from the command line, in the order given."""
    return parse_args(argv).candidates


def read_voter_count(prompt: Prompt = input) -> int:
    """Ask for the number of voters until a non-negative integer is given."""
    while True:
        text = prompt("Number of voters: ").strip()
        try:
            count = int(text)
        except ValueError:
            print("The number of voters should be an integer", file=sys.stderr)
            continue
        if count < 0:
            print("The number of voters cannot be negative", file=sys.stderr)
            continue
        return count


def read_ranked_ballot(store: BallotStore, prompt: Prompt = input) -> list[str]:
    """
    Read one voter's ranking, one position at a time.

    An unknown or repeated name is reported and the same rank is asked
    again, so the returned names always form a valid ballot.
    """
    names: list[str] = []
    ranked: list[int] = []

    while len(ranked) < store.registry.count():
        name = prompt(f"Rank {len(ranked) + 1}: ").strip()
        try:
            index = store.check_vote(name, ranked)
        except BallotError as e:
            print(e)
            continue
        ranked.append(index)
        names.append(name)

    return names


# =============================================================================
# Output
# =============================================================================

def print_summary(result: TabulationResult) -> None:
    print("\n" + "=" * 60)
    print("VOTING RESULTS")
    print("=" * 60)

    if result.has_ties:
        print("\nThe locked pairs do not give a complete ranking.")

    print("\nRanking (by Ranked Pairs, with Borda scores):\n")
    for i, candidate in enumerate(result.ranking):
        rank_str = f"{i + 1}." if not result.has_ties else f"~{i + 1}."
        borda = result.borda_scores.get(candidate.name, 0)
        print(f"  {rank_str:4} {candidate.name:40} (Borda: {borda:+d})")

    if result.rejected_pairs:
        names = result.matchup_matrix.index
        print("\nPairs skipped because they would create a cycle:\n")
        for pair in result.rejected_pairs:
            print(f"  {names[pair.winner]} over {names[pair.loser]} (margin {pair.margin})")

    print("\n" + "=" * 60)


# =============================================================================
# Main Entry Point
# =============================================================================

def run(args: argparse.Namespace, prompt: Prompt = input) -> int:
    """Run one election from parsed arguments and return the exit status."""
    verbose = args.verbose

    election = Election(args.candidates)

    if verbose:
        print(f"Found {len(election.registry)} candidates: {election.registry.names}")

    if args.ballots is not None:
        problematic = load_ballots_csv(args.ballots, election.ballots, args.invalid_ballots)
        if verbose and problematic:
            print(f"Warning: skipped invalid ballots in rows {problematic}")
    else:
        for _ in range(read_voter_count(prompt)):
            election.vote(read_ranked_ballot(election.ballots, prompt))

    if verbose:
        print(f"Recorded {len(election.ballots)} ballots")

    result = election.tabulate()

    if verbose:
        print(f"Locked {len(result.locked_pairs)} of {len(result.ranked_pairs)} pairs")
        print_summary(result)

    if args.matrix_out is not None:
        result.matchup_matrix.to_csv(args.matrix_out)
        if verbose:
            print(f"Saved matchup matrix to {args.matrix_out}")

    if result.winner is None:
        print(f"No winner: {result.no_winner}", file=sys.stderr)
        return EXIT_NO_WINNER

    print(f"The winner is {result.winner.name}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for command-line usage."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        return run(args)
    except (TidemanError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except EOFError:
        print("Error: input ended before voting finished", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
