"""Tests für die reinen Guard-Prädikate"""
import pytest

from app.models import Task
from app.services import task_guards
from app.services.task_guards import GuardStatus
from app.utils.errors import NotAllowedError, NotFoundError, TaskRequesterNotMatchError


@pytest.fixture
def snapshot() -> Task:
    """Task-Snapshot ohne Datenbank"""
    return Task(id=5, requester="r", title="t", assisters=["a", "b"], viewed=[])


@pytest.mark.unit
class TestGuardPredicates:

    def test_is_requester(self, snapshot):
        assert task_guards.is_requester("r", snapshot).ok
        assert task_guards.is_requester("a", snapshot).status == GuardStatus.DENIED

    def test_is_not_requester(self, snapshot):
        assert task_guards.is_not_requester("a", snapshot).ok
        result = task_guards.is_not_requester("r", snapshot)
        assert result.status == GuardStatus.DENIED
        assert result.reason == "Person ist der Ersteller."

    def test_is_assister(self, snapshot):
        assert task_guards.is_assister("b", snapshot).ok
        assert not task_guards.is_assister("r", snapshot).ok

    def test_is_not_assister(self, snapshot):
        assert task_guards.is_not_assister("c", snapshot).ok
        assert not task_guards.is_not_assister("a", snapshot).ok

    @pytest.mark.parametrize("guard", [
        task_guards.is_requester,
        task_guards.is_not_requester,
        task_guards.is_assister,
        task_guards.is_not_assister,
    ])
    def test_missing_snapshot(self, guard):
        assert guard("a", None).status == GuardStatus.NOT_FOUND

    def test_canonical_comparison(self):
        """Test: int- und String-IDs werden gleich behandelt"""
        task = Task(id=1, requester="7", title="t", assisters=["42"], viewed=[])

        assert task_guards.is_requester(7, task).ok
        assert task_guards.is_assister(42, task).ok


@pytest.mark.unit
class TestRaiseForStatus:

    def test_ok_does_not_raise(self, snapshot):
        task_guards.is_requester("r", snapshot).raise_for_status("r", 5)

    def test_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            task_guards.is_assister("a", None).raise_for_status("a", 5)
        assert "5" in str(exc_info.value)

    def test_denied(self, snapshot):
        with pytest.raises(NotAllowedError) as exc_info:
            task_guards.is_not_assister("a", snapshot).raise_for_status("a", 5)
        assert str(exc_info.value) == "Person ist bereits Helfer."

    def test_requester_mismatch(self, snapshot):
        with pytest.raises(TaskRequesterNotMatchError) as exc_info:
            task_guards.is_requester("x", snapshot).raise_for_status("x", 5)

        error = exc_info.value
        assert error.requester == "x"
        assert error.task_id == 5
        assert error.params == ("x", 5)
