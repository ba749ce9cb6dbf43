"""
SVG scene assembly for the contribution globe and the skill radar.

Coordinates are written with one decimal place so reruns over the same data
produce identical files.
"""

import os
from collections import namedtuple

from lxml import etree

from encoding import ORANGE, PURPLE, color_for_count, opacity_for_count, size_for_count
from projection import (
    axis_endpoints,
    day_to_latitude,
    graticule_lines,
    grid_polygons,
    orthographic_project,
    polar_angle,
    polar_to_cartesian,
    radar_vertices,
    week_to_longitude,
)

ProjectedPoint = namedtuple("ProjectedPoint", ["x", "y", "size", "opacity", "color"])

BG_DARK = "#19000e"
BG_EDGE = "#0f0009"
GRID_COLOR = "#3a2f3f"
TITLE_COLOR = "#fffffa"
FONT = "Inter, ui-sans-serif, system-ui"

GLOBE_WIDTH = 720
GLOBE_HEIGHT = 480
RADAR_WIDTH = 700
RADAR_HEIGHT = 520


def fmt(value):
    return f"{value:.1f}"


def escape_xml(text):
    """Escape special XML characters"""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("'", "&apos;")
    )


def path_data(points):
    return " ".join(
        f"{'M' if i == 0 else 'L'}{fmt(x)},{fmt(y)}" for i, (x, y) in enumerate(points)
    )


def polygon_points(points):
    return " ".join(f"{fmt(x)},{fmt(y)}" for x, y in points)


def globe_geometry(width=GLOBE_WIDTH, height=GLOBE_HEIGHT):
    """(cx, cy, radius) of the globe on its canvas"""
    return width / 2, height / 2 + 6, min(width, height) * 0.38


def map_calendar_to_sphere(window, context, geometry=None):
    """Project windowed calendar samples onto the globe and encode each one"""
    cx, cy, radius = geometry or globe_geometry()
    points = []
    for sample in window:
        lon = week_to_longitude(sample.week, context.window_size)
        lat = day_to_latitude(sample.day)
        x, y = orthographic_project(lon, lat, radius, cx, cy)
        points.append(
            ProjectedPoint(
                x=x,
                y=y,
                size=size_for_count(sample.magnitude),
                opacity=opacity_for_count(sample.magnitude, context.max_magnitude),
                color=color_for_count(sample.magnitude, context.max_magnitude),
            )
        )
    return points


def svg_header(width, height):
    return [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f"<svg xmlns='http://www.w3.org/2000/svg' width='{width}' height='{height}' "
        f"viewBox='0 0 {width} {height}'>",
    ]


def background_gradient():
    return (
        "    <radialGradient id='bg' cx='50%' cy='50%' r='75%'>\n"
        f"      <stop offset='0%' stop-color='{BG_DARK}'/>\n"
        f"      <stop offset='100%' stop-color='{BG_EDGE}'/>\n"
        "    </radialGradient>"
    )


def title_text(title, y):
    return (
        f"  <text x='50%' y='{y}' text-anchor='middle' font-family='{FONT}' "
        f"font-size='20' fill='{TITLE_COLOR}'>{escape_xml(title)}</text>"
    )


def build_globe_svg(points, window_weeks=52):
    """Globe scene; an empty point list still yields a complete document"""
    cx, cy, radius = globe_geometry()
    svg_lines = svg_header(GLOBE_WIDTH, GLOBE_HEIGHT)

    svg_lines.append("  <defs>")
    svg_lines.append(background_gradient())
    # Highlight overlay that fakes sphere shading
    svg_lines.append(
        "    <radialGradient id='shade' cx='35%' cy='30%'>\n"
        "      <stop offset='0%' stop-color='#ffffff' stop-opacity='0.18'/>\n"
        "      <stop offset='60%' stop-color='#ffffff' stop-opacity='0.05'/>\n"
        "      <stop offset='100%' stop-color='#000000' stop-opacity='0.25'/>\n"
        "    </radialGradient>"
    )
    svg_lines.append(
        "    <filter id='glow' x='-30%' y='-30%' width='160%' height='160%'>\n"
        "      <feGaussianBlur stdDeviation='1.4' result='coloredBlur'/>\n"
        "      <feMerge>\n"
        "        <feMergeNode in='coloredBlur'/>\n"
        "        <feMergeNode in='SourceGraphic'/>\n"
        "      </feMerge>\n"
        "    </filter>"
    )
    svg_lines.append("  </defs>")

    svg_lines.append("  <rect width='100%' height='100%' fill='url(#bg)'/>")
    svg_lines.append(
        f"  <circle cx='{fmt(cx)}' cy='{fmt(cy)}' r='{fmt(radius)}' fill='url(#shade)' "
        f"stroke='{PURPLE}' stroke-opacity='0.15'/>"
    )

    meridians, parallels = graticule_lines(radius, cx, cy)
    graticules = [
        f"<path d='{path_data(line)}' fill='none' stroke='{PURPLE}' "
        "stroke-opacity='0.15' stroke-width='0.8'/>"
        for line in meridians
    ]
    graticules += [
        f"<path d='{path_data(line)}' fill='none' stroke='{PURPLE}' "
        "stroke-opacity='0.12' stroke-width='0.7'/>"
        for line in parallels
    ]
    svg_lines.append(f"  <g id='graticules'>{''.join(graticules)}</g>")

    # Rotation is presentation only; coordinates are computed at zero rotation
    svg_lines.append(f"  <g id='rotating' transform='rotate(0 {fmt(cx)} {fmt(cy)})'>")
    for p in points:
        svg_lines.append(
            f"    <circle cx='{fmt(p.x)}' cy='{fmt(p.y)}' r='{p.size:.2f}' fill='{p.color}' "
            f"filter='url(#glow)' fill-opacity='{p.opacity:.2f}'/>"
        )
    svg_lines.append(
        "    <animateTransform attributeName='transform' attributeType='XML' type='rotate' "
        f"from='0 {fmt(cx)} {fmt(cy)}' to='360 {fmt(cx)} {fmt(cy)}' dur='24s' "
        "repeatCount='indefinite'/>"
    )
    svg_lines.append("  </g>")

    svg_lines.append(title_text(f"Contribution Globe (Last {window_weeks} Weeks)", 44))
    svg_lines.append("</svg>")
    return "\n".join(svg_lines)


def build_radar_svg(top, context, grid_levels=5):
    """
    Radar scene for ranked category samples.

    Vertices sit at radius * magnitude / max (linear); labels show each
    category's share of the retained total.
    """
    cx = RADAR_WIDTH / 2
    cy = RADAR_HEIGHT / 2 + 10
    radius = min(RADAR_WIDTH, RADAR_HEIGHT) * 0.32
    count = len(top)

    grid = [
        f"<polygon points='{polygon_points(vertices)}' fill='none' "
        f"stroke='{GRID_COLOR}' stroke-width='1' />"
        for vertices in grid_polygons(count, radius, cx, cy, grid_levels)
    ]
    axes = "".join(
        f"<line x1='{fmt(cx)}' y1='{fmt(cy)}' x2='{fmt(x)}' y2='{fmt(y)}' "
        f"stroke='{GRID_COLOR}' stroke-width='1' />"
        for x, y in axis_endpoints(count, radius + 12, cx, cy)
    )

    ratios = [s.magnitude / context.max_magnitude for s in top]
    data_points = polygon_points(radar_vertices(ratios, radius, cx, cy))

    labels = []
    for i, sample in enumerate(top):
        x, y = polar_to_cartesian(cx, cy, radius + 28, polar_angle(i, count))
        share = sample.magnitude / context.total_magnitude if context.total_magnitude else 0
        labels.append(
            f"<text x='{fmt(x)}' y='{fmt(y)}' text-anchor='middle' dominant-baseline='middle' "
            f"font-family='{FONT}' font-size='12' fill='{PURPLE}'>"
            f"{escape_xml(sample.name)} ({share * 100:.1f}%)</text>"
        )

    svg_lines = svg_header(RADAR_WIDTH, RADAR_HEIGHT)
    svg_lines.append("  <defs>")
    svg_lines.append(background_gradient())
    svg_lines.append("  </defs>")
    svg_lines.append("  <rect width='100%' height='100%' fill='url(#bg)'/>")
    svg_lines.append("  <g>")
    svg_lines.extend(f"    {polygon}" for polygon in grid)
    svg_lines.append(f"    {axes}")
    svg_lines.append(
        f"    <polygon points='{data_points}' fill='rgba(197,118,246,0.25)' "
        f"stroke='{ORANGE}' stroke-width='2' />"
    )
    svg_lines.append(f"    {''.join(labels)}")
    svg_lines.append("  </g>")
    svg_lines.append(title_text("Skill Radar (Last 90 Days)", 36))
    svg_lines.append("</svg>")
    return "\n".join(svg_lines)


def fallback_svg(message, width=500, height=300):
    """Minimal scene used when there is nothing to draw"""
    return (
        f"<svg xmlns='http://www.w3.org/2000/svg' width='{width}' height='{height}'>"
        f"<rect width='100%' height='100%' fill='{BG_DARK}'/>"
        "<text x='50%' y='50%' text-anchor='middle' dominant-baseline='middle' "
        f"font-family='{FONT}' font-size='16' fill='#fff'>{escape_xml(message)}</text>"
        "</svg>"
    )


def write_svg(filepath, svg):
    """Write `svg` after checking it parses; a malformed scene is never written"""
    etree.fromstring(svg.encode("utf-8"))
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(svg)
