from __future__ import annotations

"""
Reading Jupyter notebooks and pulling display content out of them.

Notebooks are owned by the surrounding content repository; this module only
reads them.  :func:`read_notebook` never raises for a bad reference: it
returns a :class:`NotebookResult` whose ``status`` says whether the file was
resolved, missing, or unreadable as a notebook, and leaves the policy for
each case to the caller.

Extraction rules:

* The description is taken from the *first* markdown cell that still has
  text once headings, blank lines, the Colab badge and the
  ``**Requirements`` line are dropped.
* The code listing is *every* code cell in document order, except empty
  cells and ``!pip`` install cells, joined with a blank line.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger

from .config import (
    CODE_BLOCK_SEPARATOR,
    COLAB_HOST,
    HEADING_MARKER,
    INSTALL_DIRECTIVE,
    REQUIREMENTS_LABEL,
)


class NotebookStatus(str, Enum):
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class NotebookResult:
    path: Path
    status: NotebookStatus
    cells: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.status is NotebookStatus.RESOLVED


def read_notebook(path: Path) -> NotebookResult:
    """
    Load a notebook file and return its cells.

    A missing file gives ``NOT_FOUND``.  A file that is not JSON, is not a
    JSON object, or whose ``cells`` is not a list gives ``MALFORMED``.
    A notebook without a ``cells`` key is treated as having no cells.
    """
    if not path.is_file():
        return NotebookResult(path=path, status=NotebookStatus.NOT_FOUND)

    try:
        nb = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Could not parse notebook {}: {}", path, e)
        return NotebookResult(path=path, status=NotebookStatus.MALFORMED)

    if not isinstance(nb, dict):
        logger.warning("Notebook {} is not a JSON object", path)
        return NotebookResult(path=path, status=NotebookStatus.MALFORMED)

    cells = nb.get("cells", [])
    if not isinstance(cells, list):
        logger.warning("Notebook {} has a non-list 'cells' field", path)
        return NotebookResult(path=path, status=NotebookStatus.MALFORMED)

    # Anything that isn't a cell object is ignored.
    cells = [c for c in cells if isinstance(c, dict)]
    return NotebookResult(path=path, status=NotebookStatus.RESOLVED, cells=cells)


def cell_text(cell: Dict[str, Any]) -> str:
    """Join a cell's ``source`` lines (nbformat also allows a plain string)."""
    src = cell.get("source")
    if isinstance(src, list):
        return "".join(str(s) for s in src)
    if isinstance(src, str):
        return src
    return ""


def _is_description_line(line: str) -> bool:
    return bool(
        line.strip()
        and not line.startswith(HEADING_MARKER)
        and COLAB_HOST not in line
        and not line.startswith(REQUIREMENTS_LABEL)
    )


def extract_description(cells: List[Dict[str, Any]]) -> str:
    for cell in cells:
        if cell.get("cell_type") != "markdown":
            continue
        lines = [ln for ln in cell_text(cell).split("\n") if _is_description_line(ln)]
        if lines:
            return " ".join(lines).strip()
    return ""


def extract_code(cells: List[Dict[str, Any]]) -> str:
    blocks: List[str] = []
    for cell in cells:
        if cell.get("cell_type") != "code":
            continue
        src = cell_text(cell)
        stripped = src.strip()
        # skip empty and install cells
        if not stripped or stripped.startswith(INSTALL_DIRECTIVE):
            continue
        blocks.append(src)
    return CODE_BLOCK_SEPARATOR.join(blocks)
