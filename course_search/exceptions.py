class CourseSearchError(Exception):
    """Base class for errors raised by course_search."""


class SearchFailedError(CourseSearchError):
    """The storage layer failed while running a search."""


class TermNotFoundError(CourseSearchError):
    def __init__(self, code: str):
        super().__init__(f"Term not found: {code}")
        self.code = code


class PlanNotFoundError(CourseSearchError):
    def __init__(self, plan_id: str):
        super().__init__(f"Plan not found: {plan_id}")
        self.plan_id = plan_id
