"""
Pytest configuration and shared fixtures for the profile artwork scripts.
"""

import os
import sys

import pytest
import responses

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import DEFAULTS, validate


@pytest.fixture
def make_config(tmp_path):
    """Build a validated Config that writes into a temporary directory."""

    def factory(**overrides):
        values = dict(DEFAULTS)
        values.update(
            username="octocat",
            readme_path=str(tmp_path / "README.md"),
            output_dir=str(tmp_path),
        )
        values.update(overrides)
        return validate(values)

    return factory


def calendar_payload(weeks):
    """GraphQL calendar response from a list of weeks of (date, count) pairs."""
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {
                        "totalContributions": sum(c for week in weeks for _, c in week),
                        "weeks": [
                            {
                                "contributionDays": [
                                    {"date": date, "contributionCount": count}
                                    for date, count in week
                                ]
                            }
                            for week in weeks
                        ],
                    }
                }
            }
        }
    }


@pytest.fixture
def sample_calendar_response():
    """Two calendar weeks; 2024-01-07 is a Sunday."""
    return calendar_payload(
        [
            [("2024-01-05", 2), ("2024-01-06", 0)],
            [
                ("2024-01-07", 1),
                ("2024-01-08", 4),
                ("2024-01-09", 0),
                ("2024-01-10", 8),
                ("2024-01-11", 3),
                ("2024-01-12", 0),
                ("2024-01-13", 6),
            ],
        ]
    )


@pytest.fixture
def sample_wakatime_response():
    """WakaTime stats response with seven languages."""
    return {
        "data": {
            "human_readable_total": "12 hrs 30 mins",
            "languages": [
                {"name": "Python", "total_seconds": 10},
                {"name": "TypeScript", "total_seconds": 50},
                {"name": "Go", "total_seconds": 30},
                {"name": "Bash", "total_seconds": 5},
                {"name": "Rust", "total_seconds": 20},
                {"name": "SQL", "total_seconds": 15},
                {"name": "YAML", "total_seconds": 1},
            ],
        }
    }


@pytest.fixture
def sample_commits_response():
    """GitHub REST response for the commits of a repository."""
    return [
        {
            "sha": "abc123",
            "commit": {
                "message": "Refresh profile artwork\n\nLonger body text",
                "author": {"name": "octocat", "date": "2026-10-15T12:00:00Z"},
            },
        },
        {
            "sha": "def456",
            "commit": {
                "message": "Initial commit",
                "author": {"name": "octocat", "date": "2026-01-01T00:00:00Z"},
            },
        },
    ]


@pytest.fixture
def sample_search_response():
    """GitHub issue search response for open pull requests."""
    return {"total_count": 7, "incomplete_results": False, "items": []}


@pytest.fixture
def sample_events_response():
    """GitHub public events feed."""
    return [
        {"type": "PushEvent", "repo": {"name": "octocat/hello-world"}, "payload": {}},
        {
            "type": "PullRequestEvent",
            "repo": {"name": "octocat/spoon-knife"},
            "payload": {"action": "opened"},
        },
        {"type": "WatchEvent", "repo": {"name": "psf/requests"}, "payload": {}},
        {"type": "ForkEvent", "repo": {"name": "pallets/flask"}, "payload": {}},
    ]


@pytest.fixture
def mocked_responses():
    """Activate responses mock for HTTP requests."""
    with responses.RequestsMock() as rsps:
        yield rsps
