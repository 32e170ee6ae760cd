"""Tests for covreport.core.merger — additive merging by point value."""
from covreport.core.assembler import decode_report, summarize
from covreport.core.merger import merge_profiles
from covreport.io.schema import (
    FileProfile,
    InstrumentationPoint,
    InstrumentationPointStats,
    ReportProfile,
)
from covreport.policy.point_type import PointType


def _point(file_name="a.js", line=1, column=0, function_name="f",
           kind=PointType.FUNCTION):
    return InstrumentationPoint(
        file_name=file_name,
        function_name=function_name,
        kind=kind,
        line=line,
        column=column,
    )


def _profile(*entries):
    """entries: (point, count) pairs, all placed in one unsorted FileProfile per file."""
    files = {}
    for point, count in entries:
        files.setdefault(point.file_name, []).append(
            InstrumentationPointStats(point=point, times_executed=count)
        )
    return ReportProfile(files=[
        FileProfile(file_name=name, stats=stats) for name, stats in files.items()
    ])


class TestMergeProfiles:

    def test_single_profile_is_identity(self, mapping, frequencies):
        profile = decode_report(mapping, frequencies)
        assert merge_profiles([profile]) == profile

    def test_same_profile_twice_doubles(self, mapping, frequencies):
        profile = decode_report(mapping, frequencies)
        merged = merge_profiles([profile, profile])
        assert [s.point for f in merged.files for s in f.stats] == [
            s.point for f in profile.files for s in f.stats
        ]
        assert [s.times_executed for f in merged.files for s in f.stats] == [
            2 * s.times_executed for f in profile.files for s in f.stats
        ]

    def test_counts_summed_per_point(self):
        p1 = _profile((_point(line=1), 2), (_point(line=2), 0))
        p2 = _profile((_point(line=2), 5), (_point(line=1), 1))
        merged = merge_profiles([p1, p2])
        stats = merged.files[0].stats
        assert [(s.point.line, s.times_executed) for s in stats] == [(1, 3), (2, 5)]

    def test_full_equality_required(self):
        base = _point(line=4)
        other_column = _point(line=4, column=1)
        other_kind = _point(line=4, kind=PointType.BRANCH)
        other_function = _point(line=4, function_name="g")
        merged = merge_profiles([
            _profile((base, 1), (other_column, 1)),
            _profile((other_kind, 1), (other_function, 1), (base, 1)),
        ])
        assert summarize(merged).total_points == 4
        counts = {s.point: s.times_executed for s in merged.files[0].stats}
        assert counts[base] == 2

    def test_output_sorted(self):
        merged = merge_profiles([
            _profile((_point("z.js", 9), 1), (_point("z.js", 3), 1)),
            _profile((_point("b.js", 7), 1)),
        ])
        assert [f.file_name for f in merged.files] == ["b.js", "z.js"]
        assert [s.point.line for s in merged.files[1].stats] == [3, 9]

    def test_no_duplicate_points_after_merge(self, mapping, frequencies):
        profile = decode_report(mapping, frequencies)
        merged = merge_profiles([profile, profile, profile])
        points = [s.point for f in merged.files for s in f.stats]
        assert len(points) == len(set(points))

    def test_disjoint_profiles_kept_apart(self):
        merged = merge_profiles([
            _profile((_point(line=1), 1)),
            _profile((_point(line=2), 1)),
        ])
        assert [s.times_executed for s in merged.files[0].stats] == [1, 1]

    def test_large_counts(self):
        big = 2**62
        merged = merge_profiles([_profile((_point(), big)), _profile((_point(), big))])
        assert merged.files[0].stats[0].times_executed == 2**63

    def test_empty_inputs(self):
        assert merge_profiles([]) == ReportProfile()
        assert merge_profiles([ReportProfile(), ReportProfile()]) == ReportProfile()
