import csv

from evaluation.run_sweep import main


def _rows(path):
    with open(path, newline="") as f:
        return list(csv.DictReader(f))


def test_sweep_over_synthetic_sizes_finds_no_violations(tmp_path):
    out = tmp_path / "sweep.csv"
    code = main(["--sizes", "300x400,400x300", "--out", str(out), "--viewport", "108", "--target", "108",
                 "--zoom-steps", "4", "--rot-steps", "3", "--pan-steps", "3"])
    assert code == 0
    rows = _rows(out)
    assert [(r["width"], r["height"]) for r in rows] == [("300", "400"), ("400", "300")]
    for r in rows:
        assert r["solves"] == str(3 * 4 * 3 * 3)
        assert r["bounds_violations"] == "0"
        assert r["monotonic_violations"] == "0"


def test_sweep_reads_sizes_from_photos(tmp_path, gradient):
    photos = tmp_path / "photos"
    photos.mkdir()
    gradient(120, 90).save(photos / "a.png")
    gradient(90, 160).save(photos / "b.jpg")
    out = tmp_path / "sweep.csv"

    code = main(["--images", str(photos), "--out", str(out), "--viewport", "100", "--target", "64",
                 "--zoom-steps", "3", "--rot-steps", "2", "--pan-steps", "2"])
    assert code == 0
    assert [(r["width"], r["height"]) for r in _rows(out)] == [("120", "90"), ("90", "160")]


def test_empty_folder_fails(tmp_path):
    assert main(["--images", str(tmp_path), "--out", str(tmp_path / "x.csv")]) == 1
