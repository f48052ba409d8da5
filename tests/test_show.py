import logging

import pytest
from rich.console import Console

from panes.layout import build_rich_tree, describe_tree, log_tree, parse_layout


def _percolated(spec):
    root = parse_layout(spec)
    root.percolate()
    return root


def test_describe_tree_lists_slots_with_depth() -> None:
    root = _percolated({"top": {"only": "A", "style": "color:red;size:0.25"}, "bottom": "B"})

    assert describe_tree(root) == [
        "0 top style=color:red size=0.25",
        "1     only src=A",
        "0 bottom size=0.75 src=B",
    ]


def test_log_tree_writes_debug_lines(caplog: pytest.LogCaptureFixture) -> None:
    root = _percolated({"left": "A", "right": "B"})

    caplog.set_level(logging.DEBUG, logger="panes.layout.show")
    log_tree(root)

    assert "0 left src=A" in caplog.text
    assert "0 right src=B" in caplog.text


def test_rich_tree_renders_positions_and_sources() -> None:
    root = _percolated({"left": {"only": "[A]", "style": "size:0.5"}, "right": "B"})
    console = Console(record=True, width=100)

    console.print(build_rich_tree(root))
    text = console.export_text()

    assert "2 panes" in text
    assert "left" in text
    assert "size=0.5" in text
    assert "[A]" in text
