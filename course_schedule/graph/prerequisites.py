from __future__ import annotations

from typing import Iterable, List, Sequence


class InvalidPrerequisiteError(ValueError):
    pass


def _check_course_id(value: object, num_courses: int) -> int:
    # bool is an int subclass, but True/False are never course ids
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPrerequisiteError(f"course id must be an int, got {value!r}")
    if not 0 <= value < num_courses:
        raise InvalidPrerequisiteError(f"course id {value} out of range [0, {num_courses})")
    return value


def build_prerequisite_map(num_courses: int, prerequisites: Iterable[Sequence[int]]) -> List[List[int]]:
    """
    Map every course to the list of courses it directly requires.

    Entry c holds each d for which (c, d) appears in `prerequisites`, in input
    order. Duplicate pairs are kept.
    """
    if isinstance(num_courses, bool) or not isinstance(num_courses, int):
        raise InvalidPrerequisiteError(f"num_courses must be an int, got {num_courses!r}")
    if num_courses < 0:
        raise InvalidPrerequisiteError(f"num_courses must be >= 0, got {num_courses}")

    prereq_map: List[List[int]] = [[] for _ in range(num_courses)]
    for pair in prerequisites:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise InvalidPrerequisiteError(f"prerequisite must be a (course, prerequisite) pair, got {pair!r}")
        course = _check_course_id(pair[0], num_courses)
        prereq = _check_course_id(pair[1], num_courses)
        prereq_map[course].append(prereq)
    return prereq_map
