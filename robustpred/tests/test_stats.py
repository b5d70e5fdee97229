from robustpred.core.adaptive import incircle, orient2d
from robustpred.core.stats import (
    PredicateStats, Stage, StageStats, format_stats_table, record_resolution, record_stages,
)

U = 2.0 ** -80


def test_each_stage_is_counted():
    with record_stages() as stats:
        orient2d((0, 0), (1, 0), (0, 1))                      # fast
        orient2d((0.5, 0.5), (12.0, 12.0), (24.0, 24.0))      # tail
        orient2d((U, 2 * U), (2 * U, 3 * U), (1.0, 1.0))      # exact
    s = stats['orient2d']
    assert (s.fast, s.partial, s.tail, s.exact) == (1, 0, 1, 1)
    assert s.calls == 3


def test_nothing_recorded_outside_a_block():
    orient2d((0, 0), (1, 0), (0, 1))
    with record_stages() as stats:
        pass
    assert stats.to_dict() == {}


def test_inner_block_takes_over():
    with record_stages() as outer:
        incircle((0, 0), (1, 0), (0, 1), (3, 3))
        with record_stages() as inner:
            incircle((0, 0), (1, 0), (0, 1), (3, 3))
            incircle((0, 0), (1, 0), (0, 1), (3, 3))
        incircle((0, 0), (1, 0), (0, 1), (3, 3))
    assert outer['incircle'].calls == 2
    assert inner['incircle'].calls == 2


def test_existing_recorder_accumulates():
    stats = StageStats()
    for _ in range(2):
        with record_stages(stats):
            orient2d((0, 0), (1, 0), (0, 1))
    assert stats['orient2d'].fast == 2


def test_bulk_records():
    with record_stages() as stats:
        record_resolution('orient3d', Stage.FAST, 10)
        record_resolution('orient3d', Stage.EXACT)
    d = stats.to_dict()['orient3d']
    assert d['calls'] == 11
    assert d['exact_rate'] == 1 / 11


def test_predicate_stats():
    s = PredicateStats()
    assert s.to_dict()['exact_rate'] == 0.0
    s.add(Stage.PARTIAL, 3)
    s.add(2)
    assert s.partial == 4
    assert StageStats()['unknown'].calls == 0


def test_format_stats_table():
    assert format_stats_table({}) == "<no stats>"
    stats = StageStats()
    stats.record('orient2d', Stage.FAST, 3)
    stats.record('insphere', Stage.EXACT)
    table = format_stats_table(stats.to_dict())
    lines = table.splitlines()
    assert lines[0].split() == ['predicate', 'calls', 'fast', 'partial', 'tail', 'exact', 'exact%']
    # rows are sorted by predicate name
    assert lines[2].split()[0] == 'insphere'
    assert lines[3].split()[:3] == ['orient2d', '3', '3']
    assert '100.00' in lines[2]
