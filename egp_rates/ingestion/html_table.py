"""Extract raw currency rows from rate tables on bank pages."""

from __future__ import annotations

import re
from typing import Iterator

from bs4 import BeautifulSoup


def _cell_text(cell) -> str:
    owner = cell.find_parent("table")
    parts = [
        text.strip()
        for text in cell.strings
        if text.strip() and text.find_parent("table") is owner
    ]
    return re.sub(r"\s+", " ", " ".join(parts)).strip()


def extract_table_rows(html: str, selector: str = "table") -> Iterator[list[str]]:
    """Yield the cell texts of every data row in the tables matching ``selector``.

    Rows without ``<td>`` cells (header rows rendered with ``<th>``) are
    skipped, as are rows whose cells are all blank. Rows of a table nested
    inside a matched table belong to the nested table only, and their text
    is left out of the enclosing cell. Raises
    ``ValueError`` when no table matches ``selector``.
    """

    soup = BeautifulSoup(html, "html.parser")
    tables = soup.select(selector)
    if not tables:
        raise ValueError(f"No tables found for selector {selector!r}")
    for table in tables:
        for tr in table.find_all("tr"):
            if tr.find_parent("table") is not table:
                continue
            cells = tr.find_all("td", recursive=False)
            if not cells:
                continue
            texts = [_cell_text(cell) for cell in cells]
            if not any(texts):
                continue
            yield texts


__all__ = ["extract_table_rows"]
