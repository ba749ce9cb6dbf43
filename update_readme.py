"""
Refresh the auto-generated section of the profile README.

Latest commit, open pull requests, WakaTime time and recent public events are
fetched in parallel; if any of them fails the README is left untouched.
"""

import datetime
import sys
import time
from concurrent.futures import ThreadPoolExecutor

from api import fetch_latest_commit, fetch_open_prs, fetch_recent_events, fetch_wakatime_summary
from config import load_config
from readme import generate_section, update_readme_file


def gather_profile_data(config):
    """Run the independent requests concurrently and join all of them"""
    token = config.github_token
    with ThreadPoolExecutor(max_workers=4) as executor:
        futures = {
            "latest_commit": executor.submit(
                fetch_latest_commit, config.username, config.profile_repo, token
            ),
            "open_prs": executor.submit(fetch_open_prs, config.username, token),
            "wakatime": executor.submit(fetch_wakatime_summary, config),
            "events": executor.submit(
                fetch_recent_events, config.username, config.events_limit, token
            ),
        }
        # .result() re-raises the first failure and fails the whole run
        return {name: future.result() for name, future in futures.items()}


def run(config, now=None):
    """Fetch, render and write; returns the new README text"""
    now = now or datetime.datetime.now(datetime.timezone.utc)

    print("\n[1/2] Fetching commit, pull request, WakaTime and event data...")
    data = gather_profile_data(config)
    print(f"       Latest commit: {data['latest_commit']['message']}")
    print(f"       Open pull requests: {data['open_prs']}")
    print(f"       WakaTime (last 7 days): {data['wakatime']}")
    print(f"       Recent events: {len(data['events'])}")

    print("\n[2/2] Updating README...")
    section = generate_section(config, now, **data)
    updated = update_readme_file(config.readme_path, section, config.marker_style)
    print(f"       Updated: {config.readme_path}")
    return updated


def main():
    print("=" * 60)
    print("Profile README Updater")
    print("=" * 60)
    start_time = time.perf_counter()
    try:
        config = load_config()
        print(f"\nUser: {config.username}")
        run(config)
    except Exception as e:
        print(f"\nError updating README: {e}", file=sys.stderr)
        return 1
    print(f"\nDone in {time.perf_counter() - start_time:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
