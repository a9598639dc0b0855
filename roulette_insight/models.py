"""
Data records shared by the session store and the socket handlers.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from config import RESULT_SOURCES
from roulette_insight.analysis.wheel import is_valid_number, get_number_properties


class InvalidNumberError(ValueError):
    """Raised for a roulette number outside 0-36."""


def validate_number(value):
    """Coerce `value` to a roulette number or raise InvalidNumberError."""
    if isinstance(value, bool):
        raise InvalidNumberError(f'Invalid number {value!r}. Enter 0-36.')
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidNumberError(f'Invalid number {value!r}. Enter 0-36.') from None
    if isinstance(value, float) and value != number:
        raise InvalidNumberError(f'Invalid number {value!r}. Enter 0-36.')
    if not is_valid_number(number):
        raise InvalidNumberError(f'Invalid number {value!r}. Enter 0-36.')
    return number


@dataclass(frozen=True)
class RouletteResult:
    number: int
    source: str = 'manual'
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def __post_init__(self):
        if not is_valid_number(self.number):
            raise InvalidNumberError(f'Invalid number {self.number!r}. Enter 0-36.')
        if self.source not in RESULT_SOURCES:
            raise ValueError(f'Unknown result source {self.source!r}')

    @classmethod
    def from_dict(cls, data):
        return cls(number=data['number'], source=data.get('source', 'manual'),
                   id=data['id'], timestamp=data['timestamp'])

    def to_dict(self):
        record = {
            'id': self.id,
            'timestamp': self.timestamp,
            'source': self.source,
        }
        record.update(get_number_properties(self.number))
        return record
