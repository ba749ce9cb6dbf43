"""
Scale mapping: pick the window of samples to render and the numbers every
ratio is taken against.
"""

from collections import namedtuple

# window_start is the first week (calendar) or rank (categories) retained
ScaleContext = namedtuple(
    "ScaleContext", ["max_magnitude", "total_magnitude", "window_start", "window_size"]
)


def safe_max(samples):
    """Largest magnitude, or 1 when every magnitude is zero"""
    highest = max((s.magnitude for s in samples), default=0)
    return highest if highest > 0 else 1


def select_recent_weeks(samples, window_weeks):
    """
    Keep the most recent `window_weeks` weeks of calendar samples.

    Retained weeks are renumbered from 0 so the newest week lands on
    window_weeks - 1. The maximum is taken over every input sample.
    """
    if not samples:
        return ScaleContext(1, 0, 0, window_weeks), []

    last_week = max(s.week for s in samples)
    first_week = max(0, last_week - (window_weeks - 1))

    window = [
        s._replace(week=s.week - first_week) for s in samples if s.week >= first_week
    ]
    context = ScaleContext(
        max_magnitude=safe_max(samples),
        total_magnitude=sum(s.magnitude for s in window),
        window_start=first_week,
        window_size=window_weeks,
    )
    return context, window


def select_top_categories(samples, top_k):
    """Top `top_k` samples by magnitude; sorted() is stable so ties keep input order"""
    ranked = sorted(samples, key=lambda s: s.magnitude, reverse=True)[:top_k]
    context = ScaleContext(
        max_magnitude=safe_max(ranked),
        total_magnitude=sum(s.magnitude for s in ranked),
        window_start=0,
        window_size=len(ranked),
    )
    return context, ranked
