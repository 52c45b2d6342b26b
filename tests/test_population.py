import pandas as pd
import pytest

from covid_dataset.analytics.population import (
    latest_history, project_population, year_columns, yearly_population,
)
from covid_dataset.data.errors import MissingColumnError, ValueCastError
from covid_dataset.data.normalize import normalize_table
from covid_dataset.data.schemas import CountryPopulationHistory


def _table(rows, columns=("country", "y_2018", "y_2019")) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=list(columns))


class TestProjectPopulation:
    def test_zero_year_excluded(self):
        histories = project_population(_table([["Nepal", "0", "29000000"]]))
        assert histories == [CountryPopulationHistory(
            country="Nepal",
            latest_year=2019,
            latest_population=29000000,
            yearly={2019: 29000000},
        )]

    def test_all_zero_or_blank_country_is_dropped(self):
        histories = project_population(_table([
            ["Atlantis", "0", ""],
            ["Nepal", "28000000", "29000000"],
            ["Lemuria", None, "  "],
        ]))
        assert [h.country for h in histories] == ["Nepal"]

    def test_latest_is_max_year_not_last_column(self):
        table = _table([["Nepal", "29000000", "28000000"]], ["country", "y_2019", "y_2018"])
        history = project_population(table)[0]
        assert history.latest_year == 2019
        assert history.latest_population == 29000000
        assert history.yearly == {2019: 29000000, 2018: 28000000}

    def test_latest_skips_trailing_zero_years(self):
        table = _table([["Nepal", "28000000", "0"]])
        history = project_population(table)[0]
        assert history.latest_year == 2018

    def test_cells_are_trimmed(self):
        history = project_population(_table([["Nepal", " 1 ", " 2,000 "]]))[0]
        assert history.yearly == {2018: 1, 2019: 2000}

    def test_unparseable_cell_is_fatal(self):
        with pytest.raises(ValueCastError) as exc:
            project_population(_table([["Nepal", "..", "29000000"]]))
        assert exc.value.column == "y_2018"

    def test_population_outside_int64_is_fatal(self):
        with pytest.raises(ValueCastError) as exc:
            project_population(_table([["Nepal", "1", "99999999999999999999"]]))
        assert exc.value.column == "y_2019"
        assert exc.value.value == "99999999999999999999"

    def test_missing_country_column(self):
        with pytest.raises(MissingColumnError):
            project_population(pd.DataFrame([["1"]], columns=["y_2019"]))

    def test_from_raw_world_bank_headers(self):
        raw = pd.DataFrame(
            [["Nepal", "NPL", "0", "29000000"], ["Atlantis", "ATL", "", "0"]],
            columns=["Country", "Country Code", "2018 [YR2018]", "2019 [YR2019]"],
        )
        histories = project_population(normalize_table(raw))
        assert len(histories) == 1
        assert histories[0].yearly == {2019: 29000000}


class TestHelpers:
    def test_year_columns(self):
        table = pd.DataFrame(columns=["country", "y_1960", "y_total", "d_20200101", "y_2020"])
        assert year_columns(table) == {"y_1960": 1960, "y_2020": 2020}

    def test_yearly_population_drops_zero(self):
        assert yearly_population({2000: "0", 2001: "", 2002: "5"}) == {2002: 5}

    def test_latest_history_empty(self):
        assert latest_history("Nowhere", {}) is None

    def test_to_dict_uses_string_years(self):
        history = latest_history("Nepal", {2019: 29000000})
        assert history.to_dict() == {
            "country": "Nepal",
            "latestYear": 2019,
            "latestPopulation": 29000000,
            "yearly": {"2019": 29000000},
        }
