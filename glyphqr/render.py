from __future__ import annotations

from xml.sax.saxutils import quoteattr

from .matrix import QRMatrix

FILL_SYMBOL = "█"
CLEAR_SYMBOL = "░"


def render_text(matrix: QRMatrix, fill: str = FILL_SYMBOL, clear: str = CLEAR_SYMBOL) -> str:
    """Render one line per module row, each terminated by a newline."""
    return "".join(
        "".join(fill if dark else clear for dark in row) + "\n"
        for row in matrix.rows()
    )


def render_svg(
    matrix: QRMatrix,
    scale: int = 10,
    margin: int = 4,
    dark: str = "#000000",
    light: str = "#ffffff",
) -> str:
    rows = matrix.rows()
    size = matrix.size
    dim = (size + margin * 2) * scale
    rects = []
    for y in range(size):
        for x in range(size):
            if rows[y][x]:
                xx = (x + margin) * scale
                yy = (y + margin) * scale
                rects.append(f'<rect x="{xx}" y="{yy}" width="{scale}" height="{scale}" />')
    rects_str = "\n        ".join(rects)
    return f"""<?xml version='1.0' encoding='UTF-8'?>
<svg xmlns='http://www.w3.org/2000/svg' width='{dim}' height='{dim}' viewBox='0 0 {dim} {dim}' shape-rendering='crispEdges'>
    <rect width='{dim}' height='{dim}' fill={quoteattr(light)}/>
    <g fill={quoteattr(dark)}>
        {rects_str}
    </g>
</svg>
"""
