from typing import Optional

from startlights import const


def hint_for(elapsed_ms: Optional[int]) -> Optional[str]:
    """Coaching line for a timed reaction; None for jump starts."""
    if elapsed_ms is None:
        return None
    for threshold, text in const.HINTS:
        if elapsed_ms > threshold:
            return text
    return const.HINT_FASTEST
