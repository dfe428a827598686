class PlannerError(Exception):
    """Base class for errors raised by the planning engine."""


class InvalidCategoryError(PlannerError, ValueError):
    """An employee category outside the four CPF categories was supplied."""

    def __init__(self, category):
        self.category = category
        super().__init__(f"Invalid employee category: {category!r}")
