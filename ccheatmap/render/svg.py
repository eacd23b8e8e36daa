"""
SVG serialization for heatmap layouts.

build_heatmap_svg is the render entry point: layout first, then one
serialization pass. All user-derived text goes through escape_text.
"""

from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from ccheatmap.models.entities import Activity, RenderConfig
from ccheatmap.output.formatter import format_plain as _n
from ccheatmap.render.layout import HeatmapLayout, Label, compute_layout

FONT_STACK = '-apple-system,BlinkMacSystemFont,"Segoe UI",Helvetica,Arial,sans-serif'

_TEXT_ENTITIES = {'"': "&quot;", "'": "&apos;", "\n": "&#10;", "\r": "&#13;"}


def escape_text(text: str) -> str:
    """Escape text for use in SVG content or attributes, newlines included."""
    return escape(str(text), _TEXT_ENTITIES)


def _style(layout: HeatmapLayout) -> str:
    txt = escape_text(layout.text_color)
    sub = escape_text(layout.sub_color)
    return (
        f"text{{font-family:{FONT_STACK};fill:{txt}}}"
        ".month{font-size:10px}.day{font-size:10px}"
        f".legend-label{{font-size:10px;fill:{sub}}}"
        ".total{font-size:11px;font-weight:600}"
        f".stat{{font-size:11px;fill:{sub}}}"
        f".stat-val{{font-size:11px;font-weight:600;fill:{txt}}}"
        f".bar-label{{font-size:11px;fill:{sub}}}"
        f".bar-val{{font-size:10px;fill:{sub}}}"
        ".section-title{font-size:12px;font-weight:600}"
    )


def _text(label: Label) -> str:
    return (
        f'<text x="{_n(label.x)}" y="{_n(label.y)}" class="{label.css_class}">'
        f'{escape_text(label.text)}</text>'
    )


def serialize_svg(layout: HeatmapLayout) -> str:
    """Serialize a computed layout into a standalone SVG document."""
    width = _n(layout.width)
    height = _n(layout.height)
    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">',
        f'<rect width="100%" height="100%" fill="{escape_text(layout.background)}" rx="6"/>',
        f"<style>{_style(layout)}</style>",
    ]

    parts.extend(_text(m) for m in layout.month_labels)
    parts.extend(_text(d) for d in layout.day_labels)

    for cell in layout.cells:
        title = "&#10;".join(escape_text(line) for line in cell.tooltip)
        parts.append(
            f'<rect x="{_n(cell.x)}" y="{_n(cell.y)}" width="{_n(cell.size)}" '
            f'height="{_n(cell.size)}" rx="{_n(cell.radius)}" fill="{escape_text(cell.fill)}">'
            f'<title>{title}</title></rect>'
        )

    legend = layout.legend
    if legend is not None:
        parts.append(
            f'<text x="{_n(legend.x)}" y="{_n(legend.text_y)}" class="legend-label">Less</text>'
        )
        for swatch in legend.swatches:
            parts.append(
                f'<rect x="{_n(swatch.x)}" y="{_n(swatch.y)}" width="{_n(swatch.size)}" '
                f'height="{_n(swatch.size)}" rx="{_n(swatch.radius)}" fill="{escape_text(swatch.fill)}"/>'
            )
        parts.append(
            f'<text x="{_n(legend.more_x)}" y="{_n(legend.text_y)}" class="legend-label">More</text>'
        )

    if layout.total_label is not None:
        parts.append(_text(layout.total_label))

    if layout.divider is not None:
        div = layout.divider
        parts.append(
            f'<line x1="{_n(div.x1)}" y1="{_n(div.y1)}" x2="{_n(div.x2)}" y2="{_n(div.y2)}" '
            f'stroke="{escape_text(div.stroke)}" stroke-width="1"/>'
        )
    for item in layout.stat_items:
        parts.append(
            f'<text x="{_n(item.x)}" y="{_n(item.y)}" class="stat">{escape_text(item.label)}'
            f'<tspan class="stat-val">{escape_text(item.value)}</tspan>{escape_text(item.suffix)}</text>'
        )

    if layout.weekday_title is not None:
        parts.append(_text(layout.weekday_title))
    for bar in layout.weekday_bars:
        parts.append(
            f'<text x="{_n(bar.label_x)}" y="{_n(bar.label_y)}" class="bar-label">{bar.day}</text>'
            f'<rect x="{_n(bar.x)}" y="{_n(bar.y)}" width="{_n(bar.width)}" height="{_n(bar.height)}" '
            f'rx="3" fill="{escape_text(bar.fill)}" opacity="0.85"/>'
            f'<text x="{_n(bar.value_x)}" y="{_n(bar.value_y)}" class="bar-val">'
            f'{escape_text(bar.value_text)}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


def build_heatmap_svg(data: Sequence[Activity], config: Optional[RenderConfig] = None) -> str:
    """Render an activity series to an SVG document string."""
    return serialize_svg(compute_layout(data, config))


def build_error_svg(message: str) -> str:
    """Small standalone SVG carrying an error message."""
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="40">'
        f'<text x="10" y="25" fill="red">{escape_text(message)}</text></svg>'
    )
