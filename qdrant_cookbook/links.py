from __future__ import annotations

"""
External links for notebook-backed entries.

Each entry that references a notebook gets two links: one that opens the
notebook in Google Colab and one that shows the file on GitHub.  Both are
derived purely from the repository identifier and the notebook path; the
file does not have to exist for a link to be produced.
"""

from .config import COLAB_URL_TEMPLATE, GITHUB_URL_TEMPLATE, REPO


def colab_url(notebook: str, repo: str = REPO) -> str:
    if not notebook:
        return ""
    return COLAB_URL_TEMPLATE.format(repo=repo, notebook=notebook)


def github_url(notebook: str, repo: str = REPO) -> str:
    if not notebook:
        return ""
    return GITHUB_URL_TEMPLATE.format(repo=repo, notebook=notebook)
