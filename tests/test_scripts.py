"""
End-to-end tests for the three scheduled scripts with mocked HTTP.
"""

import datetime
import sys
import os

import pytest
import responses
from lxml import etree

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import contrib_globe
import skill_radar
import update_readme
from api import APIError
from readme import MARKERS

SVG = "{http://www.w3.org/2000/svg}"
NOW = datetime.datetime(2026, 10, 18, 12, 0, tzinfo=datetime.timezone.utc)


def read(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class TestContribGlobe:
    """Tests for contrib_globe.run."""

    def test_no_token_draws_empty_globe(self, make_config):
        config = make_config()
        svg = contrib_globe.run(config)
        root = etree.fromstring(svg.encode("utf-8"))
        assert root.findall(f".//{SVG}g[@id='rotating']/{SVG}circle") == []
        assert read(config.output_path("contrib-globe.svg")) == svg

    @responses.activate
    def test_renders_calendar(self, make_config, sample_calendar_response):
        responses.add(
            responses.POST,
            "https://api.github.com/graphql",
            json=sample_calendar_response,
            status=200,
        )

        svg = contrib_globe.run(make_config(github_token="token"))
        root = etree.fromstring(svg.encode("utf-8"))
        circles = root.findall(f".//{SVG}g[@id='rotating']/{SVG}circle")
        assert len(circles) == 9
        assert "rgb(251,159,22)" in [c.get("fill") for c in circles]

    @responses.activate
    def test_fetch_failure_writes_fallback(self, make_config):
        responses.add(responses.POST, "https://api.github.com/graphql", status=502)

        config = make_config(github_token="token")
        svg = contrib_globe.run(config)
        assert "No contribution data" in svg
        assert read(config.output_path("contrib-globe.svg")) == svg

    @responses.activate
    def test_malformed_payload_writes_fallback(self, make_config):
        responses.add(
            responses.POST,
            "https://api.github.com/graphql",
            json={"data": {"user": {"contributionsCollection": "oops"}}},
            status=200,
        )

        svg = contrib_globe.run(make_config(github_token="token"))
        assert "No contribution data" in svg

    @responses.activate
    def test_non_object_body_writes_fallback(self, make_config):
        responses.add(
            responses.POST,
            "https://api.github.com/graphql",
            json=[1, 2],
            status=200,
        )

        config = make_config(github_token="token")
        svg = contrib_globe.run(config)
        assert "No contribution data" in svg
        assert read(config.output_path("contrib-globe.svg")) == svg

    @responses.activate
    def test_rerun_is_identical(self, make_config, sample_calendar_response):
        responses.add(
            responses.POST,
            "https://api.github.com/graphql",
            json=sample_calendar_response,
            status=200,
        )

        config = make_config(github_token="token")
        assert contrib_globe.run(config) == contrib_globe.run(config)


class TestSkillRadar:
    """Tests for skill_radar.run."""

    def test_no_credentials_writes_placeholder(self, make_config):
        config = make_config()
        svg = skill_radar.run(config)
        assert "No WakaTime data" in svg
        assert read(config.output_path("skill-radar.svg")) == svg

    @responses.activate
    def test_renders_top_six(self, make_config, sample_wakatime_response):
        responses.add(
            responses.GET,
            "https://wakatime.com/api/v1/users/octocat/stats/last_90_days",
            json=sample_wakatime_response,
            status=200,
        )

        config = make_config(wakatime_username="octocat", wakatime_api_key="key")
        root = etree.fromstring(skill_radar.run(config).encode("utf-8"))
        labels = [t.text for t in root.findall(f".//{SVG}g/{SVG}text")]
        assert len(labels) == 6
        assert labels[0].startswith("TypeScript")
        assert not any(label.startswith("YAML") for label in labels)

    @responses.activate
    def test_refused_request_writes_placeholder(self, make_config):
        responses.add(
            responses.GET,
            "https://wakatime.com/api/v1/users/octocat/stats/last_90_days",
            status=401,
        )

        config = make_config(wakatime_username="octocat", wakatime_api_key="bad")
        assert "No WakaTime data" in skill_radar.run(config)


class TestUpdateReadme:
    """Tests for update_readme.run."""

    def mock_github(self, commits, search, events):
        responses.add(
            responses.GET,
            "https://api.github.com/repos/octocat/octocat/commits",
            json=commits,
            status=200,
        )
        responses.add(
            responses.GET,
            "https://api.github.com/search/issues",
            json=search,
            status=200,
        )
        responses.add(
            responses.GET,
            "https://api.github.com/users/octocat/events/public",
            json=events,
            status=200,
        )

    @responses.activate
    def test_updates_marked_region(
        self,
        make_config,
        sample_commits_response,
        sample_search_response,
        sample_events_response,
    ):
        self.mock_github(
            sample_commits_response, sample_search_response, sample_events_response
        )
        start, end = MARKERS["colon"]
        config = make_config()
        with open(config.readme_path, "w", encoding="utf-8") as f:
            f.write(f"# Me\n\n{start}\nstale\n{end}\n\nfooter\n")

        updated = update_readme.run(config, now=NOW)

        assert updated.startswith(f"# Me\n\n{start}\n")
        assert updated.endswith(f"{end}\n\nfooter\n")
        assert "stale" not in updated
        assert "*Refresh profile artwork* (3 days ago)" in updated
        assert "Open pull requests: **7**" in updated
        assert "WakaTime (last 7 days): **No data**" in updated
        assert "Pushed to **octocat/hello-world**" in updated
        assert "pallets/flask" not in updated
        assert read(config.readme_path) == updated

    @responses.activate
    def test_failed_request_leaves_readme_untouched(
        self, make_config, sample_commits_response, sample_events_response
    ):
        responses.add(
            responses.GET,
            "https://api.github.com/repos/octocat/octocat/commits",
            json=sample_commits_response,
            status=200,
        )
        responses.add(
            responses.GET,
            "https://api.github.com/search/issues",
            json={"message": "Server Error"},
            status=500,
        )
        responses.add(
            responses.GET,
            "https://api.github.com/users/octocat/events/public",
            json=sample_events_response,
            status=200,
        )
        config = make_config()
        with open(config.readme_path, "w", encoding="utf-8") as f:
            f.write("original\n")

        with pytest.raises(APIError):
            update_readme.run(config, now=NOW)
        assert read(config.readme_path) == "original\n"

    def test_main_exit_status(self, monkeypatch):
        def boom():
            raise APIError("load_config", "unreachable")

        monkeypatch.setattr(update_readme, "load_config", boom)
        assert update_readme.main() == 1
