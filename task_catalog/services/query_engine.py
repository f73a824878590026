"""Filter predicates and orderings for task listings."""

import logging
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Optional

from ..models.task import Task
from ..schemas import SortOption, TaskCriteria, check_due_range

logger = logging.getLogger(__name__)

Predicate = Callable[[Task], bool]
Comparator = Callable[[Task, Task], int]


def match_all(task: Task) -> bool:
    return True


def build_predicate(criteria: Optional[TaskCriteria]) -> Predicate:
    """Combine the supplied criteria into one predicate (logical AND).

    An absent criterion places no constraint. A due date range, when either
    bound is given, never matches a task without a due date; both bounds are
    inclusive.

    Raises:
        InvalidRangeError: If the due date range starts after it ends
    """
    if criteria is None:
        return match_all

    check_due_range(criteria.due_start, criteria.due_end)

    checks: List[Predicate] = []

    if criteria.status is not None:
        status = criteria.status
        checks.append(lambda task: task.status == status)

    if criteria.priority is not None:
        priority = criteria.priority
        checks.append(lambda task: task.priority == priority)

    if criteria.has_due_range:
        start, end = criteria.due_start, criteria.due_end

        def in_due_range(task: Task) -> bool:
            if task.due_date is None:
                return False
            if start is not None and task.due_date < start:
                return False
            if end is not None and task.due_date > end:
                return False
            return True

        checks.append(in_due_range)

    if not checks:
        return match_all

    def predicate(task: Task) -> bool:
        return all(check(task) for check in checks)

    return predicate


def _compare(a, b) -> int:
    return (a > b) - (a < b)


def _due_date_asc(a: Task, b: Task) -> int:
    # absent dates go last
    if a.due_date is None or b.due_date is None:
        return (a.due_date is None) - (b.due_date is None)
    return _compare(a.due_date, b.due_date)


def _due_date_desc(a: Task, b: Task) -> int:
    # absent dates go first
    if a.due_date is None or b.due_date is None:
        return (b.due_date is None) - (a.due_date is None)
    return _compare(b.due_date, a.due_date)


def _priority_asc(a: Task, b: Task) -> int:
    return _compare(a.priority.rank, b.priority.rank)


def _priority_desc(a: Task, b: Task) -> int:
    return _compare(b.priority.rank, a.priority.rank)


def _title_asc(a: Task, b: Task) -> int:
    return _compare(a.title, b.title)


def _title_desc(a: Task, b: Task) -> int:
    return _compare(b.title, a.title)


COMPARATORS: Dict[SortOption, Comparator] = {
    SortOption.DUE_DATE_ASC: _due_date_asc,
    SortOption.DUE_DATE_DESC: _due_date_desc,
    SortOption.PRIORITY_ASC: _priority_asc,
    SortOption.PRIORITY_DESC: _priority_desc,
    SortOption.TITLE_ASC: _title_asc,
    SortOption.TITLE_DESC: _title_desc,
}


def sort_tasks(tasks: Iterable[Task], option: Optional[SortOption] = None) -> List[Task]:
    """Return a new list of ``tasks`` ordered by ``option``.

    The sort is stable: tasks that compare equal keep their input order. With
    no option the input order is kept as is.
    """
    if option is None:
        return list(tasks)
    comparator = COMPARATORS[option]
    logger.debug(f"Sorting tasks by {option.value}")
    return sorted(tasks, key=cmp_to_key(comparator))
