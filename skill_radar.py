"""
Render the most used languages of the last 90 days (WakaTime) as a radar.
"""

import sys

from api import APIError, fetch_wakatime_stats
from config import load_config
from samples import normalize_languages
from scale import select_top_categories
from scene import build_radar_svg, fallback_svg, write_svg

OUTPUT_FILE = "skill-radar.svg"
PLACEHOLDER_MESSAGE = "No WakaTime data"


def load_languages(config):
    """Language samples; missing credentials or a refused request mean no data"""
    if not config.has_wakatime:
        print("       WakaTime credentials not configured")
        return []
    try:
        payload = fetch_wakatime_stats(
            config.wakatime_username, config.wakatime_api_key, "last_90_days"
        )
    except APIError as e:
        print(f"       {e}", file=sys.stderr)
        return []
    return normalize_languages(payload)


def render_radar(samples, top_languages, grid_levels=5):
    if not samples:
        return fallback_svg(PLACEHOLDER_MESSAGE, 500, 380)
    context, top = select_top_categories(samples, top_languages)
    return build_radar_svg(top, context, grid_levels)


def run(config):
    """Write the radar (or its placeholder) and return the SVG text"""
    filepath = config.output_path(OUTPUT_FILE)

    print("\n[1/2] Fetching WakaTime languages...")
    samples = load_languages(config)
    print(f"       Languages: {len(samples)}")

    print("\n[2/2] Rendering radar...")
    svg = render_radar(samples, config.top_languages, config.grid_levels)
    write_svg(filepath, svg)
    if samples:
        print(f"       Updated: {filepath}")
    else:
        print(f"       Wrote placeholder: {filepath}")
    return svg


def main():
    print("=" * 60)
    print("Skill Radar")
    print("=" * 60)
    try:
        run(load_config())
    except Exception as e:
        print(f"\nFailed to generate skill radar: {e}", file=sys.stderr)
        return 1
    print("\nDone!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
