"""
Tests for the command-line driver.
"""

import csv

import pytest

from dictsimplex.main import collect_files, main

PROBLEMS = {
    "part1.dict": "2 2\n3 4\n1 2\n5 10\n-1 0\n0 -1\n0 1 1\n",    # optimum 15
    "part2.dict": "2 1\n2 3\n1\n5 -1\n-1\n1\n0 1\n",             # needs phase one, optimum 5
    "part3.dict": "2 2\n3 4\n1 2\n5 10\n1 -1\n1 0\n0 1 1\n",     # unbounded in x1
    "part4.dict": "1 1\n2\n1\n-1\n-1\n0 1\n",                     # infeasible
}


@pytest.fixture
def problem_dir(tmp_path):
    folder = tmp_path / "data"
    folder.mkdir()
    for name, content in PROBLEMS.items():
        (folder / name).write_text(content)
    (folder / "notes.txt").write_text("not a dictionary")
    return folder


def test_collect_files_expands_folders(problem_dir):
    files = collect_files([str(problem_dir)])
    assert [f.name for f in files] == sorted(PROBLEMS)


def test_batch_results(problem_dir, capsys):
    assert main([str(problem_dir)]) == 0
    lines = capsys.readouterr().out.splitlines()

    results = {line.split(": ")[0].rsplit("/", 1)[-1].rsplit("\\", 1)[-1]: line.split(": ")[1]
               for line in lines}
    assert results == {
        "part1.dict": "15",
        "part2.dict": "5",
        "part3.dict": "UNBOUNDED",
        "part4.dict": "INFEASIBLE",
    }


def test_single_pivot_mode(problem_dir, capsys):
    assert main(["--single-pivot", str(problem_dir / "part1.dict"),
                 str(problem_dir / "part3.dict")]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith(": 1 3 5")
    assert lines[1].endswith(": UNBOUNDED")


def test_bad_file_sets_exit_code(problem_dir, capsys):
    bad = problem_dir / "broken.dict"
    bad.write_text("2 2\n3 4\n")
    assert main([str(problem_dir / "part1.dict"), str(bad), str(problem_dir / "missing.dict")]) == 1
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    assert lines[0].endswith(": 15")


def test_csv_summary(problem_dir, tmp_path):
    output = tmp_path / "out" / "summary.csv"
    assert main(["--rule", "largest", "--verify", "-o", str(output), str(problem_dir)]) == 0

    with open(output, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [row["result"] for row in rows] == ["15", "5", "UNBOUNDED", "INFEASIBLE"]
    assert rows[0]["status"] == "optimal"
    assert float(rows[0]["reference_objective"]) == pytest.approx(15.0)


def test_invalid_tolerance_is_rejected(problem_dir):
    assert main(["--tolerance", "-1", str(problem_dir)]) == 1


def test_large_optimum_is_printed_exactly(tmp_path, capsys):
    path = tmp_path / "large.dict"
    path.write_text("1 1\n2\n1\n1234567.5\n-1\n0 1\n")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out.strip().endswith(": 1234567.5")

    assert main(["--single-pivot", str(path)]) == 0
    assert capsys.readouterr().out.strip().endswith(": 1 2 1234567.5")
