"""Pytest configuration and fixtures."""

import pytest
from pptx import Presentation
from pptx.util import Emu

from slidealign.anchor import AnchorResolver, InMemoryAnchorStore
from slidealign.config import Settings
from slidealign.host.memory import InMemoryPage, InMemoryShape, InMemoryTable


@pytest.fixture
def anchor_store() -> InMemoryAnchorStore:
    """Empty in-memory anchor store."""
    return InMemoryAnchorStore()


@pytest.fixture
def resolver(anchor_store: InMemoryAnchorStore) -> AnchorResolver:
    return AnchorResolver(anchor_store)


@pytest.fixture
def settings() -> Settings:
    """Settings that never reach for a real Redis server or .env file."""
    return Settings(
        _env_file=None,
        redis_url="redis://localhost:1/0",
        cell_stack_gap=5,
        default_cell_padding=2,
        default_matrix_spacing=0,
    )


@pytest.fixture
def shapes() -> list[InMemoryShape]:
    """Three boxes in a loose row; the last one is the default anchor."""
    return [
        InMemoryShape("a", left=10, top=10, width=40, height=20),
        InMemoryShape("b", left=100, top=60, width=30, height=50),
        InMemoryShape("c", left=200, top=30, width=80, height=40),
    ]


@pytest.fixture
def table() -> InMemoryTable:
    """A 3x3 table at (100, 100) with unequal columns."""
    table = InMemoryTable(
        "table",
        left=100,
        top=100,
        column_widths=[100, 200, 100],
        row_heights=[50, 50, 80],
    )
    table.fill_text([
        ["A1", "B1", "C1"],
        ["A2", "B2", "C2"],
        ["A3", "B3", "C3"],
    ])
    return table


@pytest.fixture
def page(table: InMemoryTable) -> InMemoryPage:
    return InMemoryPage([table])


@pytest.fixture
def blank_slide():
    """A blank python-pptx slide."""
    prs = Presentation()
    return prs.slides.add_slide(prs.slide_layouts[6])  # Blank layout


@pytest.fixture
def pptx_table(blank_slide):
    """A 2x3 python-pptx table with text in every cell."""
    frame = blank_slide.shapes.add_table(
        2, 3, Emu(914400), Emu(914400), Emu(3 * 914400), Emu(2 * 457200)
    )
    for r, row in enumerate(frame.table.rows):
        for c, cell in enumerate(row.cells):
            cell.text = f"r{r + 1}c{c + 1}"
    return frame
