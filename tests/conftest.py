from __future__ import annotations

import pytest

from xlmd.model import SheetData

IRIS_MARKDOWN = """| sepal.length | variety |
| --- | --- |
| 5.1 | Setosa |
"""


@pytest.fixture()
def iris_markdown() -> str:
    return IRIS_MARKDOWN


@pytest.fixture()
def sample_sheets() -> list[SheetData]:
    return [
        SheetData(
            name="Sales",
            rows=[
                ["Region", "Q1", "Q2"],
                ["North", "120", "135"],
                ["South", "", "98"],
            ],
        ),
        SheetData(
            name="Notes",
            rows=[
                ["Topic", "Detail"],
                ["North", "Revised in Q2"],
            ],
        ),
    ]
