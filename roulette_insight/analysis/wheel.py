"""
Wheel model - colour/property classification and physical neighbour lookup
for the European single-zero wheel.
"""

from config import (
    WHEEL_ORDER, NUMBER_TO_POSITION, RED_NUMBERS, BLACK_NUMBERS,
    DEFAULT_NEIGHBOR_RADIUS,
)


def is_valid_number(value):
    """True for an int (bools excluded) in 0..36."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 36


def get_number_color(number):
    if number in RED_NUMBERS:
        return 'red'
    elif number in BLACK_NUMBERS:
        return 'black'
    return 'green'


def get_number_properties(number):
    """Outside-bet groupings of a number. Zero belongs to none of them."""
    if number == 0:
        return {
            'number': 0,
            'color': 'green',
            'dozen': None,
            'column': None,
            'half': None,
            'parity': None,
        }

    return {
        'number': number,
        'color': get_number_color(number),
        'dozen': (number - 1) // 12 + 1,
        'column': (number - 1) % 3 + 1,
        'half': 'low' if number <= 18 else 'high',
        'parity': 'even' if number % 2 == 0 else 'odd',
    }


def get_neighbors(number, radius=DEFAULT_NEIGHBOR_RADIUS):
    """Numbers within `radius` pockets of `number` on the wheel, in wheel order.

    The result is centred on `number` and holds at most 2*radius+1 entries
    (never more than the 37 pockets). Empty for radius <= 0 or a number that
    is not on the wheel.
    """
    if radius <= 0 or number not in NUMBER_TO_POSITION:
        return []

    size = len(WHEEL_ORDER)
    span = min(2 * radius + 1, size)
    start = NUMBER_TO_POSITION[number] - min(radius, size // 2)
    return [WHEEL_ORDER[(start + i) % size] for i in range(span)]


def get_side_neighbors(number, radius):
    """Wheel neighbours of `number` without the number itself."""
    return [n for n in get_neighbors(number, radius) if n != number]


def format_number(number):
    return str(number).zfill(2)
