import itertools
import threading

import pytest

from app.exceptions import GenerationCancelled
from app.services.combinations import (
    deserialize_combination,
    find_unresolvable_pairs,
    generate_combinations,
    serialize_combination,
)
from app.utils.conflict import sections_conflict

from conftest import make_section

MON, TUE, WED, THU, FRI = range(5)


@pytest.fixture()
def groups():
    # A and B share Monday mornings, C is free-floating
    csc = [
        make_section(name="316", section_id="001", meetings={MON: (900, 1000), WED: (900, 1000)}),
        make_section(name="316", section_id="002", meetings={TUE: (1100, 1215), THU: (1100, 1215)}),
    ]
    ma = [
        make_section(code="MA", name="341", section_id="001", meetings={MON: (930, 1045)}),
        make_section(code="MA", name="341", section_id="002", meetings={MON: (1000, 1100)}),
        make_section(code="MA", name="341", section_id="003", meetings={TUE: (1200, 1300)}),
    ]
    hi = [
        make_section(code="HI", name="233", section_id="601", meetings={FRI: (1300, 1600)}),
    ]
    return [csc, ma, hi]


def _ids(combo):
    return tuple(f"{s.course_key}/{s.section_id}" for s in combo)


def test_matches_brute_force(groups):
    expected = {
        _ids(combo)
        for combo in itertools.product(*groups)
        if not any(sections_conflict(a, b) for a, b in itertools.combinations(combo, 2))
    }
    got = [_ids(c) for c in generate_combinations(groups)]

    assert len(got) == len(set(got))
    assert set(got) == expected
    # 001 x {002, 003} and 002 x {001, 002}
    assert len(got) == 4


def test_every_combination_is_complete_and_conflict_free(groups):
    for combo in generate_combinations(groups):
        assert len(combo) == len(groups)
        for i, s in enumerate(combo):
            assert s.course_key == groups[i][0].course_key
        for a, b in itertools.combinations(combo, 2):
            assert not sections_conflict(a, b)


def test_results_follow_group_order(groups):
    got = [_ids(c) for c in generate_combinations(groups)]
    assert got[0] == ("CSC316/001", "MA341/002", "HI233/601")
    assert got[-1] == ("CSC316/002", "MA341/002", "HI233/601")


def test_results_are_copies(groups):
    combo = generate_combinations(groups)[0]
    assert combo[0] == groups[0][0]
    assert combo[0] is not groups[0][0]


def test_empty_group_means_no_schedules(groups):
    assert generate_combinations(groups + [[]]) == []


def test_no_groups():
    assert generate_combinations([]) == []


def test_single_group_yields_each_section(groups):
    got = generate_combinations([groups[1]])
    assert [c[0].section_id for c in got] == ["001", "002", "003"]


def test_cancelled_generation_raises(groups):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(GenerationCancelled):
        generate_combinations(groups, cancel_event=cancel)


def test_unset_cancel_event_is_harmless(groups):
    assert len(generate_combinations(groups, cancel_event=threading.Event())) == 4


def test_unresolvable_pairs():
    a = [make_section(name="316", meetings={MON: (900, 1000)})]
    b = [
        make_section(code="MA", name="341", section_id="001", meetings={MON: (930, 1030)}),
        make_section(code="MA", name="341", section_id="002", meetings={MON: (800, 915)}),
    ]
    c = [make_section(code="HI", name="233", meetings={TUE: (900, 1000)})]

    assert find_unresolvable_pairs([a, b, c]) == [(0, 1)]
    assert generate_combinations([a, b, c]) == []


def test_unresolvable_pairs_skip_empty_groups(groups):
    assert find_unresolvable_pairs(groups + [[]]) == []


def test_serialized_key_restores_sections(groups):
    combo = generate_combinations(groups)[0]
    key = serialize_combination(combo)
    assert " " not in key.replace("EB2 1025", "")
    assert deserialize_combination(key) == combo
