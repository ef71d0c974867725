"""Shared fixtures.

The sample-family.ged file holds three generations of the Smith family:
John (@I1@) and Mary (@I2@) with children Robert (@I3@) and Alice (@I4@);
Robert and Emma (@I5@) with son Thomas (@I6@).
"""

from pathlib import Path

import pytest

from gedgraph.graph import build_relationship_graph
from gedgraph.models import Family, FamilyData, Profile
from gedgraph.parsing import parse_gedcom_file


@pytest.fixture
def sample_gedcom_path():
    """Path to the sample GEDCOM file."""
    return Path(__file__).parent / "sample-family.ged"


@pytest.fixture
def sample_data(sample_gedcom_path):
    return parse_gedcom_file(sample_gedcom_path)


@pytest.fixture
def sample_graph(sample_data):
    return build_relationship_graph(sample_data)


@pytest.fixture
def nuclear_family():
    """One family: husband A, wife B, child C, with matching back-references."""
    return FamilyData(
        individuals=[
            Profile(id="@A@", first_name="Adam", fams=["@F1@"]),
            Profile(id="@B@", first_name="Beth", fams=["@F1@"]),
            Profile(id="@C@", first_name="Carl", famc="@F1@"),
        ],
        families=[Family(id="@F1@", husb="@A@", wife="@B@", children=["@C@"])],
    )
