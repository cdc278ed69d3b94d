import pytest


TEAM_TABLE = (
    "<table>"
    "<thead><tr><th>Name</th><th>Role</th></tr></thead>"
    "<tbody>"
    "<tr><td>Ann</td><td>Eng</td></tr>"
    "<tr><td>Bo</td><td>PM</td></tr>"
    "<tr><td>Cy</td><td>Eng</td></tr>"
    "</tbody>"
    "</table>"
)

RICH_TABLE = (
    "<table>"
    '<thead><tr><th align="left">Name</th><th style="text-align: right">Role</th>'
    "<th>Team</th></tr></thead>"
    "<tbody>"
    "<tr><td><strong>Ann</strong></td><td>Eng</td><td>Core</td></tr>"
    "<tr><td>Bo</td><td><em>PM</em></td><td>Core</td></tr>"
    "<tr><td>Cy</td><td>Eng</td><td>Edge</td></tr>"
    "</tbody>"
    "</table>"
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def team_table_html():
    return TEAM_TABLE


@pytest.fixture
def rich_table_html():
    return RICH_TABLE


@pytest.fixture
def clock():
    return FakeClock()
