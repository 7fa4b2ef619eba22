"""Smoke test for the demonstration script."""

from demo import demo


def test_demo_runs(capsys) -> None:
    """The demo walks through every tool and prints the saved form."""
    demo()
    out = capsys.readouterr().out

    assert "Fresh 10x5 grid:" in out
    assert "After one redo:" in out
    assert "'can_redo': True" in out
    assert "Saved form:" in out
