"""Text and matplotlib renderings of a Suguru table."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from project_config import get_section

from .items import Point, TableItem, Wall
from .table import Table


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


PRINTER_CONFIG = _as_dict(get_section("printer", {}))
CELL_SIZE_IN = float(PRINTER_CONFIG.get("cell_size_in", 0.6))
DPI = int(PRINTER_CONFIG.get("dpi", 150))
FONT_SCALE = float(PRINTER_CONFIG.get("font_scale", 0.5))
BORDER_COLOR = str(PRINTER_CONFIG.get("border_color", "#1f3b73"))
OPEN_COLOR = str(PRINTER_CONFIG.get("open_color", "#c8c8c8"))
VALUE_COLOR = str(PRINTER_CONFIG.get("value_color", "#b22222"))
BORDER_WIDTH = float(PRINTER_CONFIG.get("border_width", 3.0))
OPEN_WIDTH = float(PRINTER_CONFIG.get("open_width", 0.8))
DEFAULT_COLOR = bool(PRINTER_CONFIG.get("color", False))

_BLUE = "\x1b[34m"
_DIM_GRAY = "\x1b[2m\x1b[90m"
_RED_BRIGHT = "\x1b[91m"
_RESET = "\x1b[0m"


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{_RESET}" if color else text


def _point_blocks(table: Table, point: Point) -> bool:
    x, y = point.position
    for target in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
        if table.is_object_out_of_table(target):
            continue
        item = table.item(target)
        if isinstance(item, Wall) and item.blocks:
            return True
    return False


def _render_item(table: Table, item: TableItem, color: bool) -> str:
    if isinstance(item, Point):
        if _point_blocks(table, item):
            return _paint("■", _BLUE, color)
        return _paint("■" if color else "·", _DIM_GRAY, color)
    if isinstance(item, Wall):
        horizontal = item.position.y % 2 == 0
        if horizontal:
            glyph = "═══" if item.blocks else "───"
        else:
            glyph = "║" if item.blocks else "│"
        return _paint(glyph, _BLUE if item.blocks else _DIM_GRAY, color)
    text = "" if item.value is None else str(item.value)
    return _paint(text.center(3) if len(text) < 3 else text, _RED_BRIGHT, color)


def render_text(table: Table, *, color: bool = DEFAULT_COLOR) -> str:
    """Render the table with box-drawing glyphs, top line first.

    Border and group-border walls are heavy, open walls light.  ``color``
    adds ANSI colours for terminals.
    """

    return "\n".join(
        "".join(_render_item(table, item, color) for item in row) for row in table.rows()
    )


def describe_groups(table: Table) -> str:
    """One block per group listing each cell's value and candidates."""

    blocks: List[str] = []
    for index, (group_id, cells) in enumerate(table.groups().items(), start=1):
        lines = [f"----- group {index} ({len(cells)} cells, {group_id}) -----"]
        for cell in cells:
            x, y = cell.cell_position
            candidates = ", ".join(str(value) for value in cell.candidates)
            lines.append(f"x: {x}, y: {y} | value: {cell.value} | candidates: {candidates}")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def render_figure(table: Table, *, title: str | None = None):
    """Draw ``table`` on a new matplotlib :class:`~matplotlib.figure.Figure`."""

    from matplotlib.figure import Figure

    width_in = table.columns * CELL_SIZE_IN
    height_in = table.lines * CELL_SIZE_IN
    fig = Figure(figsize=(width_in, height_in), dpi=DPI)
    ax = fig.add_axes([0.02, 0.02, 0.96, 0.96 if title is None else 0.88])
    ax.set_xlim(0, table.columns)
    ax.set_ylim(0, table.lines)
    ax.set_aspect("equal")
    ax.axis("off")

    # Open walls first so that borders are drawn on top of them.
    walls = sorted(table.walls(), key=lambda wall: wall.blocks)
    for wall in walls:
        gx, gy = wall.position
        if gy % 2 == 0:
            y = gy / 2
            xs, ys = ((gx - 1) / 2, (gx + 1) / 2), (y, y)
        else:
            x = gx / 2
            xs, ys = (x, x), ((gy - 1) / 2, (gy + 1) / 2)
        ax.plot(
            xs,
            ys,
            color=BORDER_COLOR if wall.blocks else OPEN_COLOR,
            linewidth=BORDER_WIDTH if wall.blocks else OPEN_WIDTH,
            solid_capstyle="projecting",
        )

    font_size = max(1, int(FONT_SCALE * CELL_SIZE_IN * 72))
    for cell in table.cells():
        if cell.value is None:
            continue
        x, y = cell.cell_position
        ax.text(x + 0.5, y + 0.5, str(cell.value), ha="center", va="center",
                fontsize=font_size, color=VALUE_COLOR)

    if title:
        fig.suptitle(title, fontsize=max(6, font_size // 2))
    return fig


def save_figure(table: Table, path: str | Path, *, title: str | None = None) -> Path:
    """Render ``table`` and write it to ``path`` (format from the suffix)."""

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_figure(table, title=title)
    fig.savefig(out_path)
    return out_path


__all__ = ["describe_groups", "render_figure", "render_text", "save_figure"]
