import logging
import math

import pytest

from plotsurvey.axis import Axis
from plotsurvey.config import PlothandlerConfig, UnboundedCoords
from plotsurvey.coord import X, Y, Z, Coord
from plotsurvey.errors import MissingArgumentError, PlotSurveyError
from plotsurvey.mapping import DatascaleTrafo
from plotsurvey.numbers import to_tex_string
from plotsurvey.plothandler import GenericPlothandler


def raw(*fields, meta=None):
    values = list(fields) + [None] * (3 - len(fields))
    return Coord(x=values, meta=meta)


def test_parse_coordinate_validates_and_keeps_unfiltered_copy():
    axis = Axis()

    pt = axis.parse_coordinate(raw('1', ' 2.5 ', meta='7'))

    assert pt.x == [1.0, 2.5, None]
    assert pt.unbounded_dir is None
    assert pt.unfiltered.x == ['1', ' 2.5 ', None]
    assert pt.unfiltered.meta == '7'
    assert pt.meta is None
    assert not axis.is3d


def test_parse_coordinate_normalizes_blank_fields():
    axis = Axis()
    record = raw('1', '2', '', meta='  ')

    pt = axis.parse_coordinate(record)

    assert record.x[Z] is None
    assert record.meta is None
    assert pt.unfiltered.meta is None
    assert not axis.is3d


def test_third_coordinate_latches_3d():
    axis = Axis()

    pt = axis.parse_coordinate(raw(1, 2, 3))
    assert axis.is3d
    assert axis.loop_max() == 3
    assert pt.x == [1.0, 2.0, 3.0]

    later = axis.parse_coordinate(raw(4, 5))
    assert axis.is3d
    assert later.x == [None, None, None]
    assert later.unbounded_dir is None


def test_unbounded_direction_invalidates_whole_point():
    axis = Axis()

    pt = axis.parse_coordinate(raw(1, 'inf'))

    assert pt.x == [None, None, None]
    assert pt.unbounded_dir == Y
    assert not pt.is_valid


def test_last_unbounded_direction_wins():
    axis = Axis()

    pt = axis.parse_coordinate(raw(math.nan, -math.inf))

    assert pt.unbounded_dir == Y


def test_unparsable_direction_is_a_generic_filter():
    axis = Axis()

    pt = axis.parse_coordinate(raw('abc', 2))

    assert pt.x == [None, None, None]
    assert pt.unbounded_dir is None


def test_validate_coord_requires_arguments():
    with pytest.raises(MissingArgumentError):
        Axis().validate_coord(X, None)


def test_update_limits_widens_autocomputed_limits():
    axis = Axis()

    axis.update_limits_for_coordinate(Coord(x=[1.0, 2.0, None]))
    axis.update_limits_for_coordinate(Coord(x=[-3.0, 5.0, None]))

    assert axis.min[:2] == [-3.0, 2.0]
    assert axis.max[:2] == [1.0, 5.0]
    assert axis.min[Z] == math.inf
    assert axis.max[Z] == -math.inf


def test_clip_gate_is_all_or_nothing():
    axis = Axis()
    axis.set_limits(X, min=0.0, max=10.0)
    axis.update_limits_for_coordinate(Coord(x=[5.0, 3.0, None]))

    axis.update_limits_for_coordinate(Coord(x=[15.0, 100.0, None]))

    assert axis.max[Y] == 3.0
    assert axis.min[Y] == 3.0
    assert axis.min[X] == 0.0
    assert axis.max[X] == 10.0


def test_fixed_min_does_not_block_autocomputed_max():
    axis = Axis()
    axis.set_limits(Y, min=0.0)

    axis.update_limits_for_coordinate(Coord(x=[1.0, 4.0, None]))

    assert axis.min[Y] == 0.0
    assert axis.max[Y] == 4.0
    assert not axis.autocompute_min[Y]
    assert axis.autocompute_max[Y]


def test_disabled_clipping_keeps_updating_other_directions():
    axis = Axis(clip_limits=False)
    axis.set_limits(X, min=0.0, max=10.0)

    axis.update_limits_for_coordinate(Coord(x=[15.0, 100.0, None]))

    assert axis.max[Y] == 100.0
    assert axis.max[X] == 10.0


def test_data_range_is_tracked_with_fixed_limits():
    axis = Axis()
    assert axis.autocompute_all_limits
    axis.set_limits(X, min=0.0, max=10.0)
    assert not axis.autocompute_all_limits

    axis.update_limits_for_coordinate(Coord(x=[12.0, 1.0, None]))

    assert axis.datamax[X] == 12.0
    assert axis.datamin[X] == 0.0
    assert axis.datamin[Y] == 1.0


def _handler(axis, policy=UnboundedCoords.DISCARD, warn=True):
    handler = GenericPlothandler('test', axis, config=PlothandlerConfig(unbounded_coords=policy, warn_for_filter_discards=warn))
    handler.survey_start()
    return handler


def test_datapoint_surveyed_runs_meta_hooks_in_order():
    axis = Axis()
    calls = []

    class Recording(GenericPlothandler):
        def survey_before_set_point_meta(self):
            calls.append('before')

        def set_per_point_meta(self, pt):
            calls.append('meta')

        def set_per_point_meta_limits(self, pt):
            calls.append('limits')

        def survey_after_set_point_meta(self):
            calls.append('after')

        def add_surveyed_point(self, pt):
            calls.append('add')
            super().add_surveyed_point(pt)

    handler = Recording('rec', axis)
    pt = Coord(x=[1.0, 2.0, None])

    axis.datapoint_surveyed(pt, handler)

    assert calls == ['before', 'meta', 'limits', 'after', 'add']
    assert handler.coords == [pt]


def test_discard_drops_point_and_warns_each_time(caplog):
    axis = Axis()
    handler = _handler(axis)
    unbounded = Coord(unbounded_dir=Y)
    filtered = Coord()

    with caplog.at_level(logging.WARNING, logger='plotsurvey'):
        axis.datapoint_surveyed(unbounded, handler)
        axis.datapoint_surveyed(filtered, handler)
        axis.datapoint_surveyed(unbounded, handler)

    assert handler.coords == []
    assert handler.filtered_coords_away
    assert not handler.plot_has_jumps
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 3
    assert 'it is unbounding (in y).' in messages[0]
    assert 'of a coordinate filter.' in messages[1]


def test_discard_without_warnings_is_silent(caplog):
    axis = Axis()
    handler = _handler(axis, warn=False)

    with caplog.at_level(logging.WARNING, logger='plotsurvey'):
        axis.datapoint_surveyed(Coord(unbounded_dir=X), handler)

    assert handler.filtered_coords_away
    assert not caplog.records


def test_jump_keeps_unbounded_point_as_sentinel():
    axis = Axis()
    handler = _handler(axis, UnboundedCoords.JUMP)
    sentinel = Coord(unbounded_dir=X)

    axis.datapoint_surveyed(sentinel, handler)

    assert handler.coords == [sentinel]
    assert handler.plot_has_jumps
    assert not handler.filtered_coords_away


def test_jump_drops_generically_filtered_point(caplog):
    axis = Axis()
    handler = _handler(axis, UnboundedCoords.JUMP)

    with caplog.at_level(logging.WARNING, logger='plotsurvey'):
        axis.datapoint_surveyed(Coord(), handler)

    assert handler.coords == []
    assert handler.filtered_coords_away
    assert not handler.plot_has_jumps
    assert 'of a coordinate filter.' in caplog.records[0].getMessage()


def test_datapoint_surveyed_requires_arguments():
    axis = Axis()
    with pytest.raises(MissingArgumentError):
        axis.datapoint_surveyed(None, _handler(axis))


def test_survey_summary_lists_limits_and_flags():
    axis = Axis()
    handler = _handler(axis, UnboundedCoords.JUMP)
    for record in [(1, 2), (3, 'inf'), (5, 6)]:
        handler.survey_point(record)

    summary = axis.survey_to_pgfplots(handler)

    expected = (
        f"@xmin={to_tex_string(1.0)},"
        f"@ymin={to_tex_string(2.0)},"
        f"@xmax={to_tex_string(5.0)},"
        f"@ymax={to_tex_string(6.0)},"
        f"point meta min={to_tex_string(math.inf)},"
        f"point meta max={to_tex_string(-math.inf)},"
        "@is3d=false,"
        f"@first coord={{{to_tex_string(1.0)},{to_tex_string(2.0)},}},"
        f"@last coord={{{to_tex_string(5.0)},{to_tex_string(6.0)},}},"
        "@plot has jumps=1,"
        "@filtered coords away=0,"
        "@surveyed coordindex=3,"
    )
    assert summary == expected
    assert '@zmin' not in summary


def test_survey_summary_of_empty_plot():
    axis = Axis()
    handler = _handler(axis)

    summary = axis.survey_to_pgfplots(handler)

    assert summary.startswith('point meta min=')
    assert '@first coord={,,},' in summary
    assert summary.endswith('@surveyed coordindex=0,')


def test_survey_summary_folds_meta_range_into_axis():
    axis = Axis()
    first = _handler(axis)
    first.metamin, first.metamax = 1.0, 4.0
    second = _handler(axis)
    second.metamin, second.metamax = -2.0, 3.0
    untouched = _handler(axis)

    for handler in (first, second, untouched):
        axis.survey_to_pgfplots(handler)

    assert axis.axiswide_metamin == -2.0
    assert axis.axiswide_metamax == 4.0
    assert axis.plothandlers == [first, second, untouched]


def test_serialize_coord_private_prefers_transformed_meta():
    axis = Axis()

    assert axis.serialize_coord_private(Coord(meta=2.0)) == to_tex_string(2.0)
    assert axis.serialize_coord_private(Coord(meta=2.0, metatransformed=500.0)) == to_tex_string(500.0)
    assert axis.serialize_coord_private(Coord()) == ''


def test_visphase_transform_coordinate_maps_present_coordinates():
    axis = Axis()
    axis.set_datascale_trafo(X, DatascaleTrafo(1, 5.0))
    axis.set_datascale_trafo(Y, DatascaleTrafo(0, 1.0))
    pt = Coord(x=[1.0, 2.0, None])

    axis.visphase_transform_coordinate(pt)

    assert pt.x == [pytest.approx(5.0), pytest.approx(1.0), None]


def test_visphase_transform_coordinate_needs_trafo():
    axis = Axis()
    axis.set_datascale_trafo(X, DatascaleTrafo(0, 0.0))

    with pytest.raises(PlotSurveyError):
        axis.visphase_transform_coordinate(Coord(x=[1.0, 2.0, None]))
    with pytest.raises(MissingArgumentError):
        axis.set_datascale_trafo(Y, None)
