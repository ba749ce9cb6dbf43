"""
Geometric projection: orthographic sphere for the contribution globe and
polar layout for the skill radar. All angles in the public helpers are in
degrees unless the name says otherwise.
"""

import math

LINEAR = "linear"
SQRT = "sqrt"

LATITUDE_BAND = 55  # days of the week spread over -55..+55 degrees


def week_to_longitude(week, window_weeks):
    """Oldest week at -180, newest at +180"""
    return -180 + (360 * week) / (window_weeks - 1)


def day_to_latitude(day):
    """Sunday at the bottom of the band, Saturday at the top"""
    return -LATITUDE_BAND + (2 * LATITUDE_BAND * day) / 6


def orthographic_project(lon_deg, lat_deg, radius, cx, cy):
    """Project a point of a sphere of `radius` seen head-on onto the screen"""
    lon = math.radians(lon_deg)
    lat = math.radians(lat_deg)
    x = radius * math.cos(lat) * math.sin(lon)
    y = -radius * math.sin(lat)
    return cx + x, cy + y


def polar_angle(index, count):
    """Angle in radians of axis `index` of `count`; the first axis points up"""
    return -math.pi / 2 + (2 * math.pi * index) / count


def polar_to_cartesian(cx, cy, r, angle_rad):
    return cx + r * math.cos(angle_rad), cy + r * math.sin(angle_rad)


def radial_distance(ratio, radius, curve=LINEAR):
    """Polygon vertices use the linear curve, point sizing the square root"""
    if curve == LINEAR:
        return radius * ratio
    if curve == SQRT:
        return radius * math.sqrt(ratio)
    raise ValueError(f"unknown radius curve {curve!r}")


def radar_vertex(index, count, ratio, radius, cx, cy):
    r = radial_distance(ratio, radius, LINEAR)
    return polar_to_cartesian(cx, cy, r, polar_angle(index, count))


def radar_vertices(ratios, radius, cx, cy):
    count = len(ratios)
    return [
        radar_vertex(i, count, ratio, radius, cx, cy)
        for i, ratio in enumerate(ratios)
    ]


def grid_polygons(count, radius, cx, cy, levels):
    """Concentric full-scale polygons at radius/levels, 2*radius/levels, ... radius"""
    return [
        radar_vertices([1] * count, radius * level / levels, cx, cy)
        for level in range(1, levels + 1)
    ]


def axis_endpoints(count, radius, cx, cy):
    return [polar_to_cartesian(cx, cy, radius, polar_angle(i, count)) for i in range(count)]


def meridian(lon, radius, cx, cy, step=5):
    return [orthographic_project(lon, lat, radius, cx, cy) for lat in range(-80, 81, step)]


def parallel(lat, radius, cx, cy, step=5):
    return [orthographic_project(lon, lat, radius, cx, cy) for lon in range(-180, 181, step)]


def graticule_lines(radius, cx, cy):
    """
    Longitude meridians every 30 degrees from -150 to 150 and latitude
    parallels every 30 degrees from -60 to 60, as lists of screen points.

    Returns (meridians, parallels).
    """
    meridians = [meridian(lon, radius, cx, cy) for lon in range(-150, 151, 30)]
    parallels = [parallel(lat, radius, cx, cy) for lat in range(-60, 61, 30)]
    return meridians, parallels
