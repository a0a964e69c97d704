import math

from plotsurvey.coord import Coord
from plotsurvey.numbers import to_tex_string
from plotsurvey.printer import axis_limit, bool_flag, coord_group, coords_to_tex, key_value, serialize_coord


def test_serialize_coord_leaves_missing_fields_empty():
    pt = Coord(x=[1.0, -2.0, None])

    assert serialize_coord(pt) == '1Y1.0e0],2Y2.0e0],'


def test_coord_group_puts_private_data_first():
    pt = Coord(x=[0.0, 10.0, 3.0])

    assert coord_group('abc', pt) == '{abc;0Y0.0e0],1Y1.0e1],1Y3.0e0]}'


def test_coords_to_tex_concatenates_groups():
    coords = [Coord(x=[1.0, 2.0, None], meta='a'), Coord(x=[3.0, 4.0, None], meta='b')]

    text = coords_to_tex(coords, lambda pt: pt.meta, str)

    assert text == '{a;1.0,2.0,None}{b;3.0,4.0,None}'


def test_axis_limit_skips_unset_limits():
    assert axis_limit('@xmin', math.inf) == ''
    assert axis_limit('@xmax', -math.inf) == ''
    assert axis_limit('@xmin', None) == ''
    assert axis_limit('@ymin', 0.5) == '@ymin=' + to_tex_string(0.5) + ','


def test_key_value_and_flags():
    assert key_value('@is3d', 'true') == '@is3d=true,'
    assert bool_flag(True) == '1'
    assert bool_flag(False) == '0'
