import pytest

from barblocks.errors import BarError, ErrorKind
from barblocks.state import State


@pytest.mark.parametrize(
    "name, expected",
    [
        ("warning", State.WARNING),
        ("critical", State.CRITICAL),
        ("good", State.GOOD),
        ("info", State.INFO),
        ("idle", State.IDLE),
    ],
)
def test_parse_documented_names(name, expected):
    assert State.parse(name) is expected


def test_round_trip():
    assert [State.parse(s.value) for s in State] == list(State)


def test_unknown_state():
    with pytest.raises(BarError) as info:
        State.parse("bogus")
    assert info.value.kind is ErrorKind.CONFIG