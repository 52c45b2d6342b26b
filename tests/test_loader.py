import pytest

from covid_dataset.data.errors import MalformedHeaderError, RenameCollisionError
from covid_dataset.data.loader import discover_datasets, read_raw_table
from covid_dataset.data.normalize import normalize_table
from covid_dataset.data.schemas import Status


def test_reads_headers_verbatim(dataset_dir):
    df = read_raw_table(dataset_dir / "global_confirmed.csv")
    assert list(df.columns) == ["Province/State", "Country/Region", "Lat", "Long", "1/22/20", "1/23/20", "1/24/20"]
    assert len(df) == 3


def test_cells_stay_strings(dataset_dir):
    df = read_raw_table(dataset_dir / "global_confirmed.csv")
    assert df.loc[0, "Province/State"] == ""
    assert df.loc[2, "Country/Region"] == "Korea, South"
    assert df.loc[2, "1/24/20"] == "1,002"
    assert df.loc[0, "Lat"] == "28.1667"


def test_duplicate_headers_reach_the_collision_check(tmp_path):
    path = tmp_path / "dup.csv"
    path.write_text("Lat,Lat\n1,2\n")
    df = read_raw_table(path)
    assert list(df.columns) == ["Lat", "Lat"]
    with pytest.raises(RenameCollisionError):
        normalize_table(df)


def test_blank_header_reaches_the_classifier(tmp_path):
    path = tmp_path / "blank.csv"
    path.write_text("Lat,,Lon\n1,2,3\n")
    df = read_raw_table(path)
    assert list(df.columns) == ["Lat", "", "Lon"]
    with pytest.raises(MalformedHeaderError):
        normalize_table(df)


def test_header_only_file(tmp_path):
    path = tmp_path / "empty_rows.csv"
    path.write_text("Province/State,Country/Region\n")
    df = read_raw_table(path)
    assert list(df.columns) == ["Province/State", "Country/Region"]
    assert df.empty


def test_empty_file_has_no_header(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(MalformedHeaderError):
        read_raw_table(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_raw_table(tmp_path / "nope.csv")


def test_discover_datasets(dataset_dir):
    found = discover_datasets(dataset_dir)
    assert set(found) == {Status.CONFIRMED, Status.DEATHS, Status.RECOVERED}
    (dataset_dir / "global_recovered.csv").unlink()
    assert Status.RECOVERED not in discover_datasets(dataset_dir)
