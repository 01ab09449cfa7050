import pytest

from fppmapf.action import Action


@pytest.mark.parametrize(
    "action, symbol",
    [
        (Action.FW, "F"),
        (Action.CR, "R"),
        (Action.CCR, "C"),
        (Action.E, "E"),
        (Action.P, "P"),
        (Action.D, "D"),
        (Action.W, "W"),
        (Action.NA, "W"),
    ],
)
def test_symbols(action, symbol):
    assert str(action) == symbol


def test_symbols_in_declaration_order():
    symbols = [Action.__str__(member) for member in Action]
    assert "".join(symbols) == "FRCWPDEW"