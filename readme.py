"""
README section rendering and marker-delimited replacement.
"""

import datetime
import os

from dateutil import parser, relativedelta

MARKERS = {
    "colon": ("<!-- AUTO-GENERATED: START -->", "<!-- AUTO-GENERATED: END -->"),
    "dash": ("<!-- AUTO-GENERATED-START -->", "<!-- AUTO-GENERATED-END -->"),
}

EVENT_VERBS = {
    "PushEvent": "Pushed to",
    "PullRequestEvent": "Pull request in",
    "IssuesEvent": "Issue in",
    "IssueCommentEvent": "Commented in",
    "CreateEvent": "Created",
    "WatchEvent": "Starred",
    "ForkEvent": "Forked",
    "ReleaseEvent": "Released",
}

# Events whose payload action reads better than the generic verb
ACTION_NOUNS = {"PullRequestEvent": "pull request", "IssuesEvent": "issue"}


def format_plural(unit):
    """Returns 's' when the value needs a plural suffix"""
    return "" if unit == 1 else "s"


def time_ago(date_str, now):
    """'3 days ago' style distance between an ISO timestamp and `now`"""
    if not date_str:
        return "unknown"
    try:
        then = parser.isoparse(date_str)
    except ValueError:
        return "unknown"
    if then.tzinfo is None:
        then = then.replace(tzinfo=datetime.timezone.utc)
    diff = relativedelta.relativedelta(now, then)
    for unit in ("years", "months", "days", "hours", "minutes"):
        value = getattr(diff, unit)
        if value > 0:
            return f"{value} {unit[:-1]}{format_plural(value)} ago"
    return "just now"


def format_timestamp(now):
    """Medium date-time, e.g. 'Oct 18, 2026, 9:05 AM'"""
    hour = now.strftime("%I").lstrip("0")
    return f"{now.strftime('%b')} {now.day}, {now.year}, {hour}:{now.strftime('%M %p')}"


def describe_event(event):
    """One short phrase for a GitHub public event"""
    kind = event.get("type") or "Event"
    repo = (event.get("repo") or {}).get("name", "")
    action = (event.get("payload") or {}).get("action")
    verb = EVENT_VERBS.get(kind, kind.replace("Event", ""))
    if action and kind in ACTION_NOUNS:
        verb = f"{action.capitalize()} {ACTION_NOUNS[kind]} in"
    return f"{verb} **{repo}**" if repo else verb


def generate_section(config, now, latest_commit, open_prs, wakatime, events):
    """Markdown placed between the markers; `now` is timezone-aware"""
    lines = [
        f"### {config.greeting} {format_timestamp(now)}",
        "",
        f"- 🔭 Currently working on **{config.now_working}**",
        f"- 📝 Latest commit: *{latest_commit['message']}* "
        f"({time_ago(latest_commit['date'], now)})",
        f"- 📬 Open pull requests: **{open_prs}**",
        f"- ⏱️ WakaTime (last 7 days): **{wakatime}**",
    ]
    if events:
        lines.append(
            "- 🛰️ Recent activity: " + "; ".join(describe_event(e) for e in events)
        )
    return "\n".join(lines)


def replace_marked_region(document, section, marker_style="colon"):
    """
    Swap the first marked region of `document` for `section`.

    Everything outside the marker pair is kept as is. A document without
    both markers gets the block prepended, followed by a blank line.
    HTML comment openers inside `section` are escaped so upstream text
    can never close or reopen the region.
    """
    start_marker, end_marker = MARKERS[marker_style]
    section = section.replace("<!--", "&lt;!--")
    block = f"{start_marker}\n{section}\n{end_marker}"

    start = document.find(start_marker)
    end = document.find(end_marker, start + len(start_marker)) if start != -1 else -1
    if start == -1 or end == -1:
        return f"{block}\n\n{document}"
    return document[:start] + block + document[end + len(end_marker):]


def read_readme(path, marker_style="colon"):
    """Current README text, or an empty marked region if there is none yet"""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        start_marker, end_marker = MARKERS[marker_style]
        return f"{start_marker}\n{end_marker}"


def update_readme_file(path, section, marker_style="colon"):
    """Rewrite the README at `path` with a fresh generated section"""
    updated = replace_marked_region(read_readme(path, marker_style), section, marker_style)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(updated)
    return updated
