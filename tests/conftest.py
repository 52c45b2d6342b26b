import pandas as pd
import pytest


CONFIRMED_CSV = """Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,1/24/20
,Nepal,28.1667,84.25,0,1,1
New South Wales,Australia,-33.8688,151.2093,0,0,3
,"Korea, South",36.0,128.0,1,1,"1,002"
"""

DEATHS_CSV = """Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,1/24/20
,Nepal,28.1667,84.25,0,0,0
New South Wales,Australia,-33.8688,151.2093,0,0,1
,"Korea, South",36.0,128.0,0,0,10
"""

RECOVERED_CSV = """Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,1/24/20
,Nepal,28.1667,84.25,0,0,1
New South Wales,Australia,-33.8688,151.2093,0,0,0
,"Korea, South",36.0,128.0,0,1,16
"""

POPULATION_CSV = """Country,Country Code,2018 [YR2018],2019 [YR2019]
Nepal,NPL,0,29000000
Atlantis,ATL,,0
Australia,AUS,24982688,25364307
"""


@pytest.fixture
def dataset_dir(tmp_path):
    """A dataset folder holding all four source files."""
    folder = tmp_path / "dataset"
    folder.mkdir()
    (folder / "global_confirmed.csv").write_text(CONFIRMED_CSV)
    (folder / "global_deaths.csv").write_text(DEATHS_CSV)
    (folder / "global_recovered.csv").write_text(RECOVERED_CSV)
    (folder / "global_population.csv").write_text(POPULATION_CSV)
    return folder


@pytest.fixture
def raw_confirmed() -> pd.DataFrame:
    """Raw (string-celled) confirmed table as the loader hands it over."""
    return pd.DataFrame(
        [
            ["", "Nepal", "28.1667", "84.25", "0", "1"],
            ["New South Wales", "Australia", "-33.8688", "151.2093", "0", "3"],
        ],
        columns=["Province/State", "Country/Region", "Lat", "Long", "1/22/20", "1/23/20"],
    )
