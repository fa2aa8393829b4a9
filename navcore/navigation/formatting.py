"""
Display strings for distances and durations.
"""

import math


def format_distance(meters: float) -> str:
    """
    Format a distance for display.

    Examples: 850 -> "850m", 1234 -> "1.2km", 25300 -> "25.3km"
    """
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"


def format_time(seconds: float) -> str:
    """
    Format a duration for display.

    Examples: 125 -> "2m", 3900 -> "1h 5m"
    """
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
