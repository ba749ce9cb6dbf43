"""
Render the last year of contributions as dots on a slowly rotating globe.

Weeks run around the sphere as longitude and days of the week stack up as
latitude. Without a GitHub token the globe is drawn empty; when the calendar
cannot be fetched a "No contribution data" card is written instead.
"""

import sys

import requests

from api import APIError, fetch_contribution_calendar
from config import load_config
from samples import PayloadError, normalize_calendar
from scale import select_recent_weeks
from scene import build_globe_svg, fallback_svg, map_calendar_to_sphere, write_svg

OUTPUT_FILE = "contrib-globe.svg"
FALLBACK_MESSAGE = "No contribution data"


def load_calendar(config):
    """Calendar samples; an absent token means no data rather than an error"""
    if not config.has_github_token:
        print("       No GitHub token configured, drawing an empty globe")
        return []
    payload = fetch_contribution_calendar(config.username, config.github_token)
    return normalize_calendar(payload)


def render_globe(samples, window_weeks):
    context, window = select_recent_weeks(samples, window_weeks)
    points = map_calendar_to_sphere(window, context)
    return build_globe_svg(points, window_weeks)


def run(config):
    """Write the globe (or its fallback) and return the SVG text"""
    filepath = config.output_path(OUTPUT_FILE)

    print("\n[1/2] Fetching contribution calendar...")
    try:
        samples = load_calendar(config)
    except (APIError, PayloadError, requests.RequestException) as e:
        print(f"       Failed to fetch contribution calendar: {e}", file=sys.stderr)
        svg = fallback_svg(FALLBACK_MESSAGE)
        write_svg(filepath, svg)
        print(f"       Wrote fallback: {filepath}")
        return svg
    print(f"       Days: {len(samples)}")

    print("\n[2/2] Rendering globe...")
    svg = render_globe(samples, config.window_weeks)
    write_svg(filepath, svg)
    print(f"       Updated: {filepath}")
    return svg


def main():
    print("=" * 60)
    print("Contribution Globe")
    print("=" * 60)
    try:
        run(load_config())
    except Exception as e:
        print(f"\nGlobe generation failed: {e}", file=sys.stderr)
        return 1
    print("\nDone!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
