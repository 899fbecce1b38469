import pandas as pd
import pytest

from ranked_pairs import BallotStore, CandidateRegistry
from ranked_pairs import cli


def scripted(*answers):
    it = iter(answers)
    return lambda _prompt: next(it)


def test_read_voter_count_reprompts(capsys):
    assert cli.read_voter_count(scripted("x", "-1", " 3 ")) == 3
    err = capsys.readouterr().err
    assert "should be an integer" in err
    assert "cannot be negative" in err


def test_read_ranked_ballot_reprompts_same_rank(capsys):
    store = BallotStore(CandidateRegistry(["Alice", "Bob"]))
    names = cli.read_ranked_ballot(store, scripted("Zed", "alice", "ALICE", "bob"))
    assert names == ["alice", "bob"]
    out = capsys.readouterr().out
    assert "That candidate does not exist" in out
    assert "You already voted for that candidate" in out
    assert len(store) == 0


def test_too_few_candidates_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        cli.main(["Alice"])
    assert exc.value.code == 2


def test_duplicate_candidates_abort(capsys):
    assert cli.main(["Alice", "alice"]) == cli.EXIT_ERROR
    assert "already exists" in capsys.readouterr().err


def test_interactive_election(capsys):
    args = cli.parse_args(["Alice", "Bob"])
    status = cli.run(args, scripted("2", "bob", "alice", "Bob", "Alice"))
    assert status == 0
    assert "The winner is Bob" in capsys.readouterr().out


def test_ballot_file(write_csv, capsys):
    path = write_csv([["Alice", "Bob"]] * 3)
    assert cli.main(["Alice", "Bob", "--ballots", str(path)]) == 0
    assert capsys.readouterr().out.strip().endswith("The winner is Alice")


def test_ballot_file_tie_reports_no_winner(write_csv, capsys):
    path = write_csv([["Alice", "Bob"], ["Bob", "Alice"]])
    assert cli.main(["Alice", "Bob", "--ballots", str(path)]) == cli.EXIT_NO_WINNER
    captured = capsys.readouterr()
    assert "No winner" in captured.err
    assert "The winner is" not in captured.out


def test_invalid_ballot_row(write_csv, capsys):
    path = write_csv([["Alice", "Bob"], ["Alice", "Alice"]])
    assert cli.main(["Alice", "Bob", "--ballots", str(path)]) == cli.EXIT_ERROR
    assert "row 2" in capsys.readouterr().err

    status = cli.main(["Alice", "Bob", "--ballots", str(path), "--invalid-ballots", "skip"])
    assert status == 0


def test_missing_ballot_file(tmp_path, capsys):
    status = cli.main(["Alice", "Bob", "--ballots", str(tmp_path / "missing.csv")])
    assert status == cli.EXIT_ERROR
    assert "not found" in capsys.readouterr().err


def test_matrix_out_and_verbose(write_csv, tmp_path, capsys):
    path = write_csv([["Alice", "Bob", "Carol"], ["Alice", "Carol", "Bob"]])
    out_path = tmp_path / "matchups.csv"
    status = cli.main([
        "Alice", "Bob", "Carol",
        "--ballots", str(path),
        "--matrix-out", str(out_path),
        "--verbose",
    ])
    assert status == 0
    out = capsys.readouterr().out
    assert "VOTING RESULTS" in out
    assert "Recorded 2 ballots" in out

    frame = pd.read_csv(out_path, index_col=0)
    assert frame.loc["Alice", "Bob"] == 2
    assert frame.loc["Bob", "Carol"] == 0
    assert pd.isna(frame.loc["Alice", "Alice"])


def test_read_candidate_names_returns_names():
    assert cli.read_candidate_names(["Alice", "Bob", "Carol"]) == ["Alice", "Bob", "Carol"]
