"""Tests for task filtering, sorting and overdue checks."""

from datetime import UTC, datetime, timedelta

import pytest

from tasknest.core.modules.task.filters import (
    build_board,
    filter_by_priority,
    filter_by_text,
    is_overdue,
    sort_by_due_date,
    sort_by_priority,
)
from tasknest.core.modules.task.models import SortField, SortOrder, TaskPriority, TaskQuery, TaskStatus


def titles(tasks):
    return [t.title for t in tasks]


class TestFilterByText:
    def test_matches_title_substring(self, make_task):
        tasks = [make_task("Task One"), make_task("Task Two")]
        assert titles(filter_by_text(tasks, "One")) == ["Task One"]

    def test_matches_description_ignoring_case(self, make_task):
        tasks = [make_task("Alpha", description="Buy MILK"), make_task("Beta")]
        assert titles(filter_by_text(tasks, "milk")) == ["Alpha"]

    @pytest.mark.parametrize("text", ["", "   ", "\t"])
    def test_blank_text_passes_through(self, make_task, text):
        tasks = [make_task("Task One"), make_task("Task Two")]
        assert filter_by_text(tasks, text) == tasks


class TestFilterByPriority:
    def test_exact_match(self, make_task):
        tasks = [make_task("Low", priority=TaskPriority.LOW), make_task("High", priority=TaskPriority.HIGH)]
        assert titles(filter_by_priority(tasks, TaskPriority.HIGH)) == ["High"]

    def test_all_passes_through(self, make_task):
        tasks = [make_task("Low", priority=TaskPriority.LOW), make_task("High", priority=TaskPriority.HIGH)]
        assert filter_by_priority(tasks, "all") == tasks


class TestSortByDueDate:
    @pytest.mark.parametrize("ascending", [True, False])
    def test_missing_date_always_last(self, make_task, ascending):
        no_date = make_task("No date")
        with_date = make_task("With date", due_date="2030-01-01")

        assert titles(sort_by_due_date([no_date, with_date], ascending)) == ["With date", "No date"]

    def test_ascending_and_descending(self, make_task):
        tasks = [
            make_task("Mid", due_date="2030-06-01"),
            make_task("Early", due_date="2030-01-01"),
            make_task("Late", due_date="2030-12-01"),
        ]
        assert titles(sort_by_due_date(tasks, True)) == ["Early", "Mid", "Late"]
        assert titles(sort_by_due_date(tasks, False)) == ["Late", "Mid", "Early"]

    def test_stable_for_equal_dates(self, make_task):
        tasks = [make_task("First", due_date="2030-01-01"), make_task("Second", due_date="2030-01-01")]
        assert titles(sort_by_due_date(tasks, True)) == ["First", "Second"]
        assert titles(sort_by_due_date(tasks, False)) == ["First", "Second"]

    def test_unparseable_date_sorts_with_missing(self, make_task):
        tasks = [make_task("Garbage", due_date="someday"), make_task("Real", due_date="2030-01-01")]
        assert titles(sort_by_due_date(tasks)) == ["Real", "Garbage"]

    def test_does_not_mutate_input(self, make_task):
        tasks = [make_task("B", due_date="2030-02-01"), make_task("A", due_date="2030-01-01")]
        sort_by_due_date(tasks)
        assert titles(tasks) == ["B", "A"]


class TestSortByPriority:
    def test_weights(self, make_task):
        tasks = [
            make_task("Medium", priority=TaskPriority.MEDIUM),
            make_task("High", priority=TaskPriority.HIGH),
            make_task("Low", priority=TaskPriority.LOW),
        ]
        assert titles(sort_by_priority(tasks, True)) == ["Low", "Medium", "High"]
        assert titles(sort_by_priority(tasks, False)) == ["High", "Medium", "Low"]

    def test_stable_within_priority(self, make_task):
        tasks = [make_task("A", priority=TaskPriority.HIGH), make_task("B", priority=TaskPriority.HIGH)]
        assert titles(sort_by_priority(tasks, False)) == ["A", "B"]


class TestIsOverdue:
    def test_pending_task_due_yesterday_is_overdue(self, make_task):
        yesterday = (datetime.now(UTC) - timedelta(days=1)).isoformat()
        assert is_overdue(make_task(due_date=yesterday)) is True

    def test_completed_task_is_never_overdue(self, make_task):
        task = make_task(due_date="2000-01-01", status=TaskStatus.COMPLETED)
        assert is_overdue(task) is False

    def test_future_or_missing_date_is_not_overdue(self, make_task):
        tomorrow = (datetime.now(UTC) + timedelta(days=1)).date().isoformat()
        assert is_overdue(make_task(due_date=tomorrow)) is False
        assert is_overdue(make_task()) is False

    def test_date_only_is_midnight_utc(self, make_task):
        task = make_task(due_date="2030-01-01", status=TaskStatus.IN_PROGRESS)
        assert is_overdue(task, at=datetime(2030, 1, 1, 0, 0, 1, tzinfo=UTC)) is True
        assert is_overdue(task, at=datetime(2030, 1, 1, tzinfo=UTC)) is False


class TestBuildBoard:
    def test_filters_sorts_and_partitions(self, make_task):
        tasks = [
            make_task("Report draft", priority=TaskPriority.LOW, status=TaskStatus.COMPLETED),
            make_task("Report review", priority=TaskPriority.HIGH, status=TaskStatus.IN_PROGRESS),
            make_task("Report send", priority=TaskPriority.MEDIUM),
            make_task("Groceries", priority=TaskPriority.HIGH),
        ]
        query = TaskQuery(search="report", sort_by=SortField.PRIORITY, sort_order=SortOrder.DESC)

        board = build_board(tasks, query)

        assert titles(board.tasks) == ["Report review", "Report send", "Report draft"]
        assert titles(board.pending) == ["Report send"]
        assert titles(board.in_progress) == ["Report review"]
        assert titles(board.completed) == ["Report draft"]

    def test_priority_filter(self, make_task):
        tasks = [make_task("A", priority=TaskPriority.LOW), make_task("B", priority=TaskPriority.HIGH)]
        board = build_board(tasks, TaskQuery(priority=TaskPriority.LOW))
        assert titles(board.tasks) == ["A"]

    def test_default_query_keeps_order(self, make_task):
        tasks = [make_task("B"), make_task("A")]
        assert titles(build_board(tasks, TaskQuery()).tasks) == ["B", "A"]
