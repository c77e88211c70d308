from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from course_schedule.graph.prerequisites import build_prerequisite_map

log = logging.getLogger(__name__)


@dataclass
class CourseScheduleDetector:
    """
    Depth-first cycle check over a course -> prerequisites map.

    The map is consumed as a memo: once a course is known to resolve, its
    entry is cleared, so an empty entry means "nothing left to check".
    `visiting` holds the courses on the current path. A detector answers
    one query; build a new one per query.
    """

    prereq_map: List[List[int]]
    visiting: Set[int] = field(default_factory=set)
    last_cycle: Optional[List[int]] = None

    resolved: int = 0
    edges_visited: int = 0

    def can_resolve(self, course: int) -> bool:
        if course in self.visiting:
            return False
        if not self.prereq_map[course]:
            return True

        self.visiting.add(course)
        # frames: (course, index of next prerequisite to check)
        stack: List[Tuple[int, int]] = [(course, 0)]

        while stack:
            node, i = stack[-1]
            prereqs = self.prereq_map[node]

            if i == len(prereqs):
                stack.pop()
                self.visiting.discard(node)
                prereqs.clear()
                self.resolved += 1
                continue

            stack[-1] = (node, i + 1)
            p = prereqs[i]
            self.edges_visited += 1

            if p in self.visiting:
                # failure aborts the query, so visiting is left as is
                self.last_cycle = self._cycle_from(stack, p)
                log.debug("cycle found from course=%s: %s", course, self.last_cycle)
                return False
            if not self.prereq_map[p]:
                continue

            self.visiting.add(p)
            stack.append((p, 0))

        return True

    @staticmethod
    def _cycle_from(stack: List[Tuple[int, int]], repeated: int) -> List[int]:
        path = [n for n, _ in stack]
        start = path.index(repeated)
        return path[start:] + [repeated]

    def stats(self) -> Dict[str, int]:
        return {"resolved": self.resolved, "edges_visited": self.edges_visited}


def detect(num_courses: int, prerequisites: Iterable[Sequence[int]]) -> CourseScheduleDetector:
    detector = CourseScheduleDetector(build_prerequisite_map(num_courses, prerequisites))
    for course in range(num_courses):
        if not detector.can_resolve(course):
            break
    return detector


def can_finish(num_courses: int, prerequisites: Iterable[Sequence[int]]) -> bool:
    """True iff no course depends on itself through its prerequisites."""
    return detect(num_courses, prerequisites).last_cycle is None


def find_cycle(num_courses: int, prerequisites: Iterable[Sequence[int]]) -> Optional[List[int]]:
    """Return one dependency cycle as [c, ..., c], or None when every course can be finished."""
    return detect(num_courses, prerequisites).last_cycle
