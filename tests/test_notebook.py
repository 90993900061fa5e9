import json

import pytest

from qdrant_cookbook.notebook import (
    NotebookStatus,
    cell_text,
    extract_code,
    extract_description,
    read_notebook,
)

from conftest import make_notebook, write_notebook


def _cells(pairs):
    return make_notebook(pairs)["cells"]


def test_scenario_title_install_and_print():
    cells = _cells([
        ("markdown", "# Title\n\nA short agent demo.\n"),
        ("code", "!pip install foo"),
        ("code", "print(1)"),
    ])
    assert extract_description(cells) == "A short agent demo."
    assert extract_code(cells) == "print(1)"


def test_description_drops_badge_requirements_and_headings():
    cells = _cells([
        (
            "markdown",
            "# Heading\n"
            "[![Open In Colab](https://colab.research.google.com/badge.svg)](x)\n"
            "First line.\n"
            "   \n"
            "Second line.\n"
            "**Requirements:** qdrant\n",
        ),
    ])
    assert extract_description(cells) == "First line. Second line."


def test_description_uses_first_markdown_cell_with_text():
    cells = _cells([
        ("code", "x = 1"),
        ("markdown", "# Only a title\n## And a subtitle\n"),
        ("markdown", "The real description."),
        ("markdown", "Not this one."),
    ])
    assert extract_description(cells) == "The real description."


def test_description_empty_without_markdown_text():
    cells = _cells([("markdown", "# Title\n"), ("code", "x = 1")])
    assert extract_description(cells) == ""
    assert extract_description([]) == ""


def test_description_is_deterministic():
    cells = _cells([("markdown", "# T\nSome words here.\nMore words.")])
    assert extract_description(cells) == extract_description(cells)


def test_code_keeps_order_and_skips_empty_and_install_cells():
    cells = _cells([
        ("code", "import os\n"),
        ("markdown", "text between"),
        ("code", "   \n"),
        ("code", "  !pip install -q something"),
        ("code", "print(os.getcwd())"),
    ])
    assert extract_code(cells) == "import os\n\n\nprint(os.getcwd())"


def test_code_empty_when_no_code_cells_qualify():
    cells = _cells([("code", "!pip install x"), ("markdown", "hi")])
    assert extract_code(cells) == ""


def test_cell_text_accepts_string_and_list_sources():
    assert cell_text({"source": ["a\n", "b"]}) == "a\nb"
    assert cell_text({"source": "plain"}) == "plain"
    assert cell_text({}) == ""


def test_read_notebook_statuses(tmp_path):
    good = write_notebook(tmp_path / "good.ipynb", [("code", "x = 1")])
    result = read_notebook(good)
    assert result.status is NotebookStatus.RESOLVED
    assert result.resolved
    assert len(result.cells) == 1

    assert read_notebook(tmp_path / "nope.ipynb").status is NotebookStatus.NOT_FOUND

    bad = tmp_path / "bad.ipynb"
    bad.write_text("{not json", encoding="utf-8")
    assert read_notebook(bad).status is NotebookStatus.MALFORMED

    not_object = tmp_path / "list.ipynb"
    not_object.write_text(json.dumps([1, 2]), encoding="utf-8")
    assert read_notebook(not_object).status is NotebookStatus.MALFORMED

    bad_cells = tmp_path / "cells.ipynb"
    bad_cells.write_text(json.dumps({"cells": "nope"}), encoding="utf-8")
    assert read_notebook(bad_cells).status is NotebookStatus.MALFORMED


def test_read_notebook_without_cells_is_empty(tmp_path):
    path = tmp_path / "empty.ipynb"
    path.write_text(json.dumps({"nbformat": 4}), encoding="utf-8")
    result = read_notebook(path)
    assert result.resolved
    assert result.cells == []


@pytest.mark.parametrize("cells", [{}, "", 0, None])
def test_read_notebook_empty_non_list_cells_is_malformed(tmp_path, cells):
    path = tmp_path / "falsy.ipynb"
    path.write_text(json.dumps({"cells": cells}), encoding="utf-8")
    result = read_notebook(path)
    assert result.status is NotebookStatus.MALFORMED
    assert result.cells == []


def test_read_notebook_empty_cell_list_is_resolved(tmp_path):
    path = tmp_path / "none.ipynb"
    path.write_text(json.dumps({"cells": []}), encoding="utf-8")
    assert read_notebook(path).status is NotebookStatus.RESOLVED
