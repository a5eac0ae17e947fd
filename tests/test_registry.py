import pytest

from schedsim.errors import NotFoundError, ValidationError
from schedsim.registry import ProcessRegistry


def test_add_initialises_runtime_fields():
    reg = ProcessRegistry()
    p = reg.add("P1", arrival=3, burst=4, priority=2)
    assert p.remaining == 4
    assert p.start is None
    assert p.finish is None
    assert p.priority == 2
    assert reg.get("P1") is p


def test_default_priority_is_zero():
    reg = ProcessRegistry()
    assert reg.add("P1", 0, 1).priority == 0


@pytest.mark.parametrize(
    "pid, arrival, burst, field",
    [
        ("P2", -1, 3, "arrival"),
        ("P2", 0, 0, "burst"),
        ("P2", 0, -4, "burst"),
        ("P1", 0, 3, "pid"),
        ("idle", 0, 3, "pid"),
        ("", 0, 3, "pid"),
    ],
)
def test_add_rejects_invalid_parameters(pid, arrival, burst, field):
    reg = ProcessRegistry()
    reg.add("P1", 0, 1)
    with pytest.raises(ValidationError) as excinfo:
        reg.add(pid, arrival, burst)
    assert excinfo.value.field == field
    assert len(reg) == 1


def test_validation_error_is_a_value_error():
    reg = ProcessRegistry()
    with pytest.raises(ValueError):
        reg.add("P1", 0, 0)


def test_remove_and_lookup_unknown_pid():
    reg = ProcessRegistry()
    reg.add("P1", 0, 1)
    reg.remove("P1")
    assert len(reg) == 0
    with pytest.raises(NotFoundError):
        reg.remove("P1")
    with pytest.raises(NotFoundError):
        reg.get("P9")


def test_iteration_keeps_insertion_order():
    reg = ProcessRegistry()
    for pid in ["C", "A", "B"]:
        reg.add(pid, 0, 1)
    assert reg.pids == ["C", "A", "B"]
    assert [p.pid for p in reg] == ["C", "A", "B"]


def test_restore_all_and_all_finished():
    reg = ProcessRegistry()
    p = reg.add("P1", 0, 2)
    p.remaining = 0
    p.start, p.finish = 0, 2
    assert reg.all_finished()

    reg.restore_all()
    assert not reg.all_finished()
    assert (p.remaining, p.start, p.finish) == (2, None, None)
