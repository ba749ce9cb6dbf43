"""
Normalize raw API payloads into flat, ordered lists of Samples.

An absent payload (no data at all) is a valid, empty result. A payload that
is present but shaped wrong raises PayloadError, so nothing downstream has
to guess at missing fields.
"""

from collections import namedtuple

from dateutil import parser

# Calendar samples carry week/day/date, category samples carry name.
Sample = namedtuple(
    "Sample", ["magnitude", "week", "day", "name", "date"],
    defaults=(None, None, None, None),
)


class PayloadError(ValueError):
    """Raised when an upstream payload does not have the expected structure"""


def _path(payload, *keys):
    """Follow nested keys, returning None as soon as one is absent"""
    node = payload
    for key in keys:
        if node is None:
            return None
        if not isinstance(node, dict):
            raise PayloadError(f"expected an object at '{key}', got {type(node).__name__}")
        node = node.get(key)
    return node


def _list(value, where):
    if value is None:
        return []
    if not isinstance(value, list):
        raise PayloadError(f"{where} must be a list, got {type(value).__name__}")
    return value


def magnitude(value, where):
    """Coerce a count or duration; missing values count as zero"""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"{where} must be a number, got {value!r}")
    if value < 0 or value != value:
        raise PayloadError(f"{where} must be a non-negative number, got {value!r}")
    return value


def day_of_week(date_str):
    """Sunday = 0 .. Saturday = 6"""
    if not isinstance(date_str, str):
        raise PayloadError(f"invalid contribution date {date_str!r}")
    try:
        return parser.isoparse(date_str).isoweekday() % 7
    except (TypeError, ValueError):
        raise PayloadError(f"invalid contribution date {date_str!r}")


def normalize_calendar(payload):
    """
    Flatten a GraphQL contribution calendar into calendar Samples.

    The week index is the position of the week in the response; the day
    index comes from the date itself, since the first and last weeks of a
    calendar are usually partial.
    """
    weeks = _list(
        _path(payload, "data", "user", "contributionsCollection",
              "contributionCalendar", "weeks"),
        "contributionCalendar.weeks",
    )
    samples = []
    for week_index, week in enumerate(weeks):
        if not isinstance(week, dict):
            raise PayloadError(f"week {week_index} must be an object")
        days = _list(week.get("contributionDays"), f"weeks[{week_index}].contributionDays")
        for day in days:
            if not isinstance(day, dict):
                raise PayloadError(f"week {week_index} has a malformed day entry")
            date = day.get("date")
            samples.append(
                Sample(
                    magnitude=magnitude(day.get("contributionCount"), "contributionCount"),
                    week=week_index,
                    day=day_of_week(date),
                    date=date,
                )
            )
    return samples


def normalize_languages(payload):
    """WakaTime stats -> category Samples of seconds per language, in input order"""
    languages = _list(_path(payload, "data", "languages"), "data.languages")
    samples = []
    for i, language in enumerate(languages):
        if not isinstance(language, dict):
            raise PayloadError(f"languages[{i}] must be an object")
        name = language.get("name")
        if not isinstance(name, str) or not name:
            raise PayloadError(f"languages[{i}] has no name")
        samples.append(
            Sample(
                magnitude=magnitude(language.get("total_seconds"), f"{name}.total_seconds"),
                name=name,
            )
        )
    return samples
