"""
Unit tests for the wheel model: colours, outside-bet properties and
physical neighbour lookup.
"""
import pytest

from config import (
    WHEEL_ORDER, NUMBER_TO_POSITION, RED_NUMBERS, BLACK_NUMBERS, GREEN_NUMBERS,
    TABLE_LAYOUT, NEIGHBOR_TABLE, NEIGHBOR_TABLE_RADIUS, TOTAL_NUMBERS,
    DOZENS, COLUMNS, LOW_NUMBERS, HIGH_NUMBERS, ODD_NUMBERS, EVEN_NUMBERS,
)
from roulette_insight.analysis.wheel import (
    is_valid_number, get_number_color, get_number_properties,
    get_neighbors, get_side_neighbors, format_number,
)


# ═══════════════════════════════════════════════════════════════
# Static tables
# ═══════════════════════════════════════════════════════════════

class TestTables:
    def test_wheel_has_every_number_once(self):
        assert len(WHEEL_ORDER) == TOTAL_NUMBERS
        assert set(WHEEL_ORDER) == set(range(37))

    def test_position_lookup_matches_wheel(self):
        for pos, num in enumerate(WHEEL_ORDER):
            assert NUMBER_TO_POSITION[num] == pos

    def test_colours_partition_the_numbers(self):
        assert len(RED_NUMBERS) == 18
        assert len(BLACK_NUMBERS) == 18
        assert not RED_NUMBERS & BLACK_NUMBERS
        assert RED_NUMBERS | BLACK_NUMBERS | GREEN_NUMBERS == set(range(37))

    def test_table_layout_covers_1_to_36(self):
        assert len(TABLE_LAYOUT) == 3
        assert all(len(row) == 12 for row in TABLE_LAYOUT)
        assert sorted(n for row in TABLE_LAYOUT for n in row) == list(range(1, 37))
        assert TABLE_LAYOUT[0][-1] == 36

    def test_outside_bet_sets_match_properties(self):
        for num in range(1, 37):
            props = get_number_properties(num)
            assert num in DOZENS[props['dozen']]
            assert num in COLUMNS[props['column']]
            assert (num in LOW_NUMBERS) == (props['half'] == 'low')
            assert (num in HIGH_NUMBERS) == (props['half'] == 'high')
            assert (num in EVEN_NUMBERS) == (props['parity'] == 'even')
            assert (num in ODD_NUMBERS) == (props['parity'] == 'odd')

    def test_neighbor_table_matches_lookup(self):
        assert set(NEIGHBOR_TABLE) == set(range(37))
        for num, neighbors in NEIGHBOR_TABLE.items():
            assert len(neighbors) == 2 * NEIGHBOR_TABLE_RADIUS + 1
            assert neighbors == get_neighbors(num, NEIGHBOR_TABLE_RADIUS)


# ═══════════════════════════════════════════════════════════════
# Colours and properties
# ═══════════════════════════════════════════════════════════════

class TestNumberProperties:
    @pytest.mark.parametrize('number,color', [
        (0, 'green'), (1, 'red'), (2, 'black'), (17, 'black'), (32, 'red'), (36, 'red'),
    ])
    def test_colour(self, number, color):
        assert get_number_color(number) == color

    def test_zero_has_no_outside_groups(self):
        props = get_number_properties(0)
        assert props['color'] == 'green'
        assert props['dozen'] is None
        assert props['column'] is None
        assert props['half'] is None
        assert props['parity'] is None

    def test_one(self):
        props = get_number_properties(1)
        assert props == {'number': 1, 'color': 'red', 'dozen': 1, 'column': 1,
                         'half': 'low', 'parity': 'odd'}

    def test_seventeen(self):
        props = get_number_properties(17)
        assert props['dozen'] == 2
        assert props['column'] == 2
        assert props['half'] == 'low'
        assert props['parity'] == 'odd'

    def test_thirty_six(self):
        props = get_number_properties(36)
        assert props['dozen'] == 3
        assert props['column'] == 3
        assert props['half'] == 'high'
        assert props['parity'] == 'even'

    @pytest.mark.parametrize('number,dozen', [(12, 1), (13, 2), (24, 2), (25, 3)])
    def test_dozen_boundaries(self, number, dozen):
        assert get_number_properties(number)['dozen'] == dozen

    def test_halves_split_at_18(self):
        assert get_number_properties(18)['half'] == 'low'
        assert get_number_properties(19)['half'] == 'high'

    def test_valid_numbers(self):
        assert is_valid_number(0)
        assert is_valid_number(36)
        assert not is_valid_number(37)
        assert not is_valid_number(-1)
        assert not is_valid_number('5')
        assert not is_valid_number(True)

    def test_format_number(self):
        assert format_number(7) == '07'
        assert format_number(0) == '00'
        assert format_number(36) == '36'


# ═══════════════════════════════════════════════════════════════
# Neighbours
# ═══════════════════════════════════════════════════════════════

class TestNeighbors:
    def test_centred_on_number(self):
        assert get_neighbors(17, 3) == [21, 2, 25, 17, 34, 6, 27]

    def test_wraps_around_zero(self):
        assert get_neighbors(0, 2) == [3, 26, 0, 32, 15]
        assert get_neighbors(26, 1) == [3, 26, 0]

    def test_radius_zero_is_empty(self):
        assert get_neighbors(17, 0) == []
        assert get_neighbors(17, -2) == []

    def test_unknown_number_is_empty(self):
        assert get_neighbors(37, 2) == []
        assert get_neighbors(-1, 2) == []

    def test_large_radius_is_whole_wheel(self):
        neighbors = get_neighbors(5, 50)
        assert len(neighbors) == TOTAL_NUMBERS
        assert set(neighbors) == set(range(37))

    @pytest.mark.parametrize('radius', [1, 2, 3, 9, 18])
    def test_length_and_contiguity(self, radius):
        for num in range(37):
            neighbors = get_neighbors(num, radius)
            assert len(neighbors) == 2 * radius + 1
            assert neighbors[radius] == num
            for a, b in zip(neighbors, neighbors[1:]):
                assert (NUMBER_TO_POSITION[b] - NUMBER_TO_POSITION[a]) % TOTAL_NUMBERS == 1

    def test_side_neighbors_exclude_centre(self):
        sides = get_side_neighbors(17, 2)
        assert sides == [2, 25, 34, 6]
        assert 17 not in sides
