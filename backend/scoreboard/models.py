from dataclasses import dataclass, asdict
from datetime import datetime, timezone


def format_timestamp(moment: datetime) -> str:
    """Render a UTC ISO-8601 timestamp with millisecond precision, e.g. 2024-05-01T12:00:00.123Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value):
    """Parse a stored timestamp; returns None when it is missing or malformed."""
    if not isinstance(value, str) or not value:
        return None
    try:
        moment = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass
class ScoreRecord:
    name: str
    score: int
    date: str

    @classmethod
    def create(cls, name: str, score: int, moment: datetime) -> 'ScoreRecord':
        return cls(name=name, score=score, date=format_timestamp(moment))

    def to_dict(self):
        return asdict(self)
