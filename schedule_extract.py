from __future__ import annotations

import math
from collections import defaultdict

from schedule_models import Line, Token


def page_tokens(page) -> list[Token]:
    """Turn pdfplumber words into Tokens with a y-up baseline.

    pdfplumber measures ``top``/``bottom`` downward from the top edge, so the
    baseline is flipped against the page height to keep "larger y = higher on
    the page", which is what the reading-order traversal expects by default.
    """
    tokens: list[Token] = []
    for w in page.extract_words(keep_blank_chars=False, use_text_flow=True) or []:
        text = (w.get("text") or "").strip()
        if not text:
            continue
        tokens.append(
            Token(
                text=text,
                x=float(w["x0"]),
                y=float(page.height) - float(w["bottom"]),
                width=float(w["x1"]) - float(w["x0"]),
                height=float(w["bottom"]) - float(w["top"]),
            )
        )
    return tokens


def bucket_key(y: float, bucket: float = 2.0) -> float:
    """Round half up, so a baseline on a bucket midpoint joins the bucket above."""
    return math.floor(y / bucket + 0.5) * bucket


def group_lines(tokens: list[Token], bucket: float = 2.0) -> dict[float, list[Token]]:
    """Bucket tokens by quantized vertical position. Keys keep first-seen order."""
    by_y: dict[float, list[Token]] = defaultdict(list)
    for t in tokens:
        by_y[bucket_key(t.y, bucket)].append(t)
    return dict(by_y)


def to_line(y_key: float, tokens: list[Token]) -> Line:
    row = sorted(tokens, key=lambda t: t.x)
    full_text = " ".join(t.text for t in row).strip()
    return Line(y=y_key, tokens=row, full_text=full_text)


def ordered_lines(groups: dict[float, list[Token]], y_axis_up: bool = True) -> list[Line]:
    """Return lines top to bottom.

    With a y-up coordinate space the top of the page has the largest key, so
    keys are walked in descending order; a y-down space walks them ascending.
    """
    keys = sorted(groups.keys(), reverse=y_axis_up)
    return [to_line(k, groups[k]) for k in keys]


def format_lines(lines: list[Line]) -> str:
    """Render lines as ``y: text`` rows for inspecting a new template."""
    return "\n".join(f"  {line.y:8.1f}: {line.full_text!r}" for line in lines)
