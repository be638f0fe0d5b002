import pytest
from hypothesis import given, strategies as st

from kafkawire.assignment import Assignment, Assignments, from_map


def test_from_map_sorts_topics_and_partitions():
    assignments = from_map({"zeta": [3, 1, 3, 2], "alpha": []})
    assert [a.topic for a in assignments] == ["alpha", "zeta"]
    assert assignments[assignments.topic_ref("zeta")].partitions == (1, 2, 3)
    assert assignments[assignments.topic_ref("alpha")].partitions == ()


def test_topic_ref_unknown_topic():
    assignments = from_map({"orders": [0], "payments": [1]})
    assert assignments.topic_ref("missing") is None
    assert assignments.topic_ref("") is None


def test_topic_ref_on_empty():
    assignments = from_map({})
    assert len(assignments) == 0
    assert assignments.topic_ref("orders") is None


def test_getitem_out_of_range():
    assignments = from_map({"orders": [0]})
    assert len(assignments) == 1
    assert assignments[assignments.topic_ref("orders")] == Assignment("orders", (0,))
    with pytest.raises(IndexError):
        assignments[len(assignments)]


def test_assignment_is_immutable():
    assignment = Assignment("orders", (1, 2))
    with pytest.raises(AttributeError):
        assignment.topic = "other"
    assert assignment.topic == "orders"
    assert assignment.partitions == (1, 2)


def test_assignments_constructor_orders_items():
    assignments = Assignments([Assignment("b", (1,)), Assignment("a", (0,))])
    assert list(assignments) == [Assignment("a", (0,)), Assignment("b", (1,))]


@given(
    st.dictionaries(
        st.text(max_size=8),
        st.lists(st.integers(min_value=-5, max_value=50), max_size=10),
        max_size=12,
    )
)
def test_from_map_invariants(src):
    assignments = from_map(src)
    assert len(assignments) == len(src)
    topics = [a.topic for a in assignments]
    assert topics == sorted(src)
    for topic, partitions in src.items():
        ref = assignments.topic_ref(topic)
        assignment = assignments[ref]
        assert assignment.topic == topic
        assert list(assignment.partitions) == sorted(set(partitions))
        assert all(a < b for a, b in zip(assignment.partitions, assignment.partitions[1:]))