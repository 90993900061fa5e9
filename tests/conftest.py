import json
from pathlib import Path

import pytest

from qdrant_cookbook.registry import ContentRegistry

REGISTRY_YAML = """\
etl:
  - slug: csv-loader
    title: Load CSV files
    notebook: notebooks/etl/csv.ipynb
    tags: [csv, pandas]
    requires_api_key: false
  - slug: postgres-sync
    title: PostgreSQL to Qdrant
    notebook: ""
    tags: [postgres, sql, incremental]
    requires_api_key: false
  - slug: pdf-loader
    title: Extract PDF text
    notebook: notebooks/etl/missing.ipynb
    tags: [pdf, chunking]
    requires_api_key: false
agents:
  - slug: demo-agent
    title: Demo Agent
    notebook: notebooks/agents/demo.ipynb
    tags: [demo]
    requires_api_key: true
  - slug: router
    title: Router Agent
    notebook:
    tags: [routing, intent]
configs:
  - slug: hnsw
    title: HNSW Index Tuning
    notebook: notebooks/configs/broken.ipynb
    tags: [hnsw, indexing]
    requires_api_key: false
  - slug: quantization
    title: Quantization Settings
    notebook: ""
    tags: [quantization, memory]
    requires_api_key: false
"""


def make_notebook(cells):
    """``cells`` is a list of (cell_type, text) pairs."""
    return {
        "cells": [
            {
                "cell_type": ctype,
                "metadata": {},
                "source": text.splitlines(keepends=True),
            }
            for ctype, text in cells
        ],
        "metadata": {},
        "nbformat": 4,
        "nbformat_minor": 5,
    }


def write_notebook(path: Path, cells) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(make_notebook(cells)), encoding="utf-8")
    return path


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    (tmp_path / "registry.yaml").write_text(REGISTRY_YAML, encoding="utf-8")

    write_notebook(
        tmp_path / "notebooks/etl/csv.ipynb",
        [
            (
                "markdown",
                "# Load CSV files\n"
                "\n"
                "[![Open In Colab](https://colab.research.google.com/assets/colab-badge.svg)](https://colab.research.google.com/x)\n"
                "\n"
                "Read a CSV file and upsert it.\n"
                "Uses batching.\n"
                "\n"
                "**Requirements:** a running Qdrant.\n",
            ),
            ("code", "!pip install qdrant-client pandas"),
            ("code", "import pandas as pd\n"),
            ("markdown", "Second paragraph that is never used."),
            ("code", "df = pd.read_csv('data.csv')"),
        ],
    )
    write_notebook(
        tmp_path / "notebooks/agents/demo.ipynb",
        [
            ("markdown", "# Title\n\nA short agent demo.\n"),
            ("code", "!pip install foo"),
            ("code", "print(1)"),
        ],
    )
    broken = tmp_path / "notebooks/configs/broken.ipynb"
    broken.parent.mkdir(parents=True, exist_ok=True)
    broken.write_text("{not json", encoding="utf-8")
    return tmp_path


@pytest.fixture
def registry(content_root: Path) -> ContentRegistry:
    return ContentRegistry(content_root)
