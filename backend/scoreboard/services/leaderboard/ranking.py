import math
from datetime import datetime, timezone
from numbers import Real
from typing import Any, List, Optional, Tuple

from scoreboard.errors import ValidationError
from scoreboard.models import ScoreRecord, parse_timestamp

# Malformed or missing dates rank after every real timestamp on a score tie
_UNDATED = datetime.max.replace(tzinfo=timezone.utc)


def validate_submission(name: Any, score: Any) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"name must be a non-empty string, got {name!r}")
    if isinstance(score, bool) or not isinstance(score, Real):
        raise ValidationError(f"score must be a finite number, got {score!r}")
    # ints are always finite
    if isinstance(score, float) and not math.isfinite(score):
        raise ValidationError(f"score must be a finite number, got {score!r}")


def normalize_name(name: str, max_length: int = 15) -> str:
    """Truncate first, then trim, so whitespace exposed by the cut is dropped too."""
    return name[:max_length].strip()


def clamp_score(score, low: int = 0, high: int = 999999):
    clamped = min(max(low, score), high)
    if isinstance(clamped, float) and clamped.is_integer():
        return int(clamped)
    return clamped


def _score_of(entry: Any):
    score = entry.get('score') if isinstance(entry, dict) else None
    if isinstance(score, bool) or not isinstance(score, Real):
        return 0
    return score


def rank_key(entry: Any) -> Tuple[float, datetime]:
    """Sort key: score descending, then earlier submission first."""
    moment = parse_timestamp(entry.get('date')) if isinstance(entry, dict) else None
    return (-_score_of(entry), moment or _UNDATED)


def rank(entries: List[Any], size: int = 10) -> List[Any]:
    return sorted(entries, key=rank_key)[:size]


def find_index(entries: List[Any], name: str) -> Optional[int]:
    for idx, entry in enumerate(entries):
        if isinstance(entry, dict) and entry.get('name') == name:
            return idx
    return None


def merge_score(entries: List[Any], name: str, score, moment: datetime) -> Tuple[str, Optional[Any]]:
    """Fold one normalized submission into ``entries`` in place.

    Returns ``(outcome, previous_score)`` where outcome is one of
    ``'updated'``, ``'unchanged'`` or ``'added'``. Only a strictly higher
    score replaces an existing record, and its date moves to ``moment``.
    """
    idx = find_index(entries, name)
    if idx is None:
        entries.append(ScoreRecord.create(name, score, moment).to_dict())
        return 'added', None
    existing = entries[idx]
    previous = existing.get('score')
    if score > _score_of(existing):
        existing['score'] = score
        existing['date'] = ScoreRecord.create(name, score, moment).date
        return 'updated', previous
    return 'unchanged', previous
