"""
Compass Widget: sidebar SVG compass showing the selected wind.

Rendered via st.components.v1.html(); display-only (the radio buttons
remain the input).
"""

import math

from models.entities import WindDirection

_HEADING_DEG = {
    WindDirection.NORTH: 0.0,
    WindDirection.EAST: 90.0,
    WindDirection.SOUTH: 180.0,
    WindDirection.WEST: 270.0,
}


def compass_html(wind: WindDirection, size: int = 160) -> str:
    """
    Return an HTML string containing an SVG compass.

    The needle points the way the wind pushes CO2.  A calm wind draws a
    slashed circle instead of a needle.

    Args:
        wind: Selected wind direction.
        size: Pixel width/height of the compass.

    Returns:
        HTML string with embedded SVG.
    """
    cx = cy = size / 2
    r = size / 2 - 12

    labels_svg = []
    for label, deg in (("N", 0), ("E", 90), ("S", 180), ("W", 270)):
        rad = math.radians(deg)
        lr = r - 14
        lx = cx + lr * math.sin(rad)
        ly = cy - lr * math.cos(rad)
        labels_svg.append(
            f'<text x="{lx:.1f}" y="{ly:.1f}" text-anchor="middle" '
            f'dominant-baseline="central" fill="#ffffff" font-size="13" '
            f'font-weight="bold" font-family="sans-serif">{label}</text>'
        )

    if wind is WindDirection.CALM:
        mark_svg = (
            f'<circle cx="{cx}" cy="{cy}" r="16" fill="none" stroke="#ef4444" stroke-width="3"/>'
            f'<line x1="{cx - 11:.1f}" y1="{cy + 11:.1f}" x2="{cx + 11:.1f}" y2="{cy - 11:.1f}" '
            f'stroke="#ef4444" stroke-width="3" stroke-linecap="round"/>'
        )
        caption = "Calm"
    else:
        needle_rad = math.radians(_HEADING_DEG[wind])
        tip_r = r - 30
        tip_x = cx + tip_r * math.sin(needle_rad)
        tip_y = cy - tip_r * math.cos(needle_rad)
        tail_x = cx - tip_r * math.sin(needle_rad)
        tail_y = cy + tip_r * math.cos(needle_rad)

        # Arrowhead wings
        perp_rad = needle_rad + math.pi / 2
        base_x = tip_x - 14 * math.sin(needle_rad)
        base_y = tip_y + 14 * math.cos(needle_rad)
        w1x = base_x + 9 * math.sin(perp_rad)
        w1y = base_y - 9 * math.cos(perp_rad)
        w2x = base_x - 9 * math.sin(perp_rad)
        w2y = base_y + 9 * math.cos(perp_rad)

        mark_svg = (
            f'<line x1="{tail_x:.1f}" y1="{tail_y:.1f}" x2="{tip_x:.1f}" y2="{tip_y:.1f}" '
            f'stroke="deepskyblue" stroke-width="3" stroke-linecap="round"/>'
            f'<polygon points="{tip_x:.1f},{tip_y:.1f} {w1x:.1f},{w1y:.1f} {w2x:.1f},{w2y:.1f}" '
            f'fill="deepskyblue"/>'
        )
        caption = f"Toward {wind.name.title()}"

    caption_svg = (
        f'<text x="{cx}" y="{size - 1}" text-anchor="middle" '
        f'fill="rgba(255,255,255,0.5)" font-size="10" font-family="sans-serif">'
        f'{caption}</text>'
    )

    svg = (
        f'<svg width="{size}" height="{size}" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="{size}" height="{size}" rx="8" fill="#0e1117"/>'
        f'<circle cx="{cx}" cy="{cy}" r="{r:.1f}" fill="none" stroke="rgba(255,255,255,0.3)" stroke-width="1.5"/>'
        f'{"".join(labels_svg)}'
        f'{mark_svg}'
        f'{caption_svg}'
        f'</svg>'
    )

    return f'<div style="display:flex;justify-content:center;">{svg}</div>'
