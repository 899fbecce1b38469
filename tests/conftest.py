import os
import sys

import pytest


# Ensure the repository root is on sys.path for tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def write_csv(tmp_path):
    """Write ballot rows (lists of names) to a CSV file with a rank header."""
    def _write(rows, name="ballots.csv", width=None):
        width = width or max(len(r) for r in rows)
        lines = [",".join(f"rank{i + 1}" for i in range(width))]
        lines.extend(",".join(r) for r in rows)
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write
