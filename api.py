"""
HTTP collaborators: GitHub REST + GraphQL and the WakaTime stats API.

Every function returns decoded JSON (or a small value picked out of it).
Non-success statuses raise APIError; transport errors surface as
requests.RequestException.
"""

import requests

GITHUB_API = "https://api.github.com"
GRAPHQL_URL = GITHUB_API + "/graphql"
WAKATIME_API = "https://wakatime.com/api/v1"

CALENDAR_QUERY = """
query($login: String!) {
    user(login: $login) {
        contributionsCollection {
            contributionCalendar {
                totalContributions
                weeks {
                    contributionDays { date contributionCount }
                }
            }
        }
    }
}"""


class APIError(Exception):
    """An upstream service answered with a non-success status or an error body"""

    def __init__(self, func_name, message, status_code=None):
        super().__init__(f"{func_name}() failed: {message}")
        self.status_code = status_code


def github_headers(token=None):
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = "Bearer " + token
    return headers


def check_response(func_name, response):
    """Raise APIError for anything but a 2xx response"""
    if response.ok:
        return response
    if response.status_code == 403:
        raise APIError(
            func_name, "Rate limit or abuse detection triggered", response.status_code
        )
    raise APIError(
        func_name,
        f"status {response.status_code}: {response.text}",
        response.status_code,
    )


def get_json(func_name, url, params=None, token=None):
    """GET a REST endpoint and return its JSON body"""
    response = requests.get(url, params=params, headers=github_headers(token))
    return check_response(func_name, response).json()


def simple_request(func_name, query, variables, token):
    """Makes a GraphQL request and returns the decoded payload"""
    if not token:
        raise APIError(func_name, "a GitHub token is required to query GraphQL")
    response = requests.post(
        GRAPHQL_URL,
        json={"query": query, "variables": variables},
        headers=github_headers(token),
    )
    payload = check_response(func_name, response).json()
    if not isinstance(payload, dict):
        raise APIError(func_name, "unexpected response body")
    if payload.get("errors"):
        raise APIError(func_name, f"GitHub API error: {payload['errors']}")
    return payload


def fetch_contribution_calendar(username, token):
    """Raw GraphQL payload with the contribution calendar of `username`"""
    return simple_request(
        "fetch_contribution_calendar", CALENDAR_QUERY, {"login": username}, token
    )


def fetch_latest_commit(username, repo, token=None):
    """
    Latest commit on the default branch of username/repo.

    Returns a dict with the first line of the message and the author date
    (None when the repository has no commits).
    """
    commits = get_json(
        "fetch_latest_commit", f"{GITHUB_API}/repos/{username}/{repo}/commits",
        token=token,
    )
    if not commits:
        return {"message": "No commits", "date": None}
    commit = commits[0].get("commit") or {}
    message = (commit.get("message") or "").strip().splitlines()
    return {
        "message": message[0] if message else "No commits",
        "date": (commit.get("author") or {}).get("date"),
    }


def fetch_open_prs(username, token=None):
    """Number of open pull requests authored by `username`"""
    data = get_json(
        "fetch_open_prs",
        f"{GITHUB_API}/search/issues",
        params={"q": f"author:{username} type:pr is:open"},
        token=token,
    )
    return data.get("total_count") or 0


def fetch_recent_events(username, limit, token=None):
    """Most recent public events of `username`, newest first"""
    if limit <= 0:
        return []
    events = get_json(
        "fetch_recent_events",
        f"{GITHUB_API}/users/{username}/events/public",
        params={"per_page": max(limit, 10)},
        token=token,
    )
    return events[:limit]


def fetch_wakatime_stats(username, api_key, stats_range):
    """Response object of the WakaTime stats endpoint for `stats_range`"""
    response = requests.get(
        f"{WAKATIME_API}/users/{username}/stats/{stats_range}",
        params={"api_key": api_key},
    )
    stats = check_response("fetch_wakatime_stats", response).json()
    if not isinstance(stats, dict):
        raise APIError("fetch_wakatime_stats", "unexpected response body")
    return stats


def fetch_wakatime_summary(config):
    """Human readable coding time over the last 7 days, or 'No data'"""
    if not config.has_wakatime:
        return "No data"
    stats = fetch_wakatime_stats(
        config.wakatime_username, config.wakatime_api_key, "last_7_days"
    )
    return (stats.get("data") or {}).get("human_readable_total") or "No data"
