from __future__ import annotations

import pytest

from schedule_models import Token

HEADER_Y = 700.0
FIRST_DAY_X = 100.0
DAY_STEP = 20.0


def day_x(day: int) -> float:
    return FIRST_DAY_X + DAY_STEP * (day - 1)


def row(y: float, *items: tuple[str, float]) -> list[Token]:
    return [Token(text=text, x=x, y=y, width=8.0, height=8.0) for text, x in items]


def header_row(y: float = HEADER_Y, days: int = 31) -> list[Token]:
    return row(y, *[(str(d), day_x(d)) for d in range(1, days + 1)])


@pytest.fixture
def schedule_page():
    """Build a page: a day header at y=700 plus whatever rows are passed in."""

    def build(*rows: list[Token], days: int = 31, title: str | None = None) -> list[Token]:
        tokens: list[Token] = []
        if title:
            tokens += row(760.0, *[(w, 20.0 + 60 * i) for i, w in enumerate(title.split())])
        tokens += header_row(days=days)
        for r in rows:
            tokens += r
        return tokens

    return build
