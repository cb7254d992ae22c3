"""Exceptions raised by the harness.

Every failure the engine reports is one of these. None of them is retried
by the engine itself; the only retry is the bounded polling in
``keepcheck.waiting``.
"""


class HarnessError(Exception):
    """Base exception for harness errors."""
    pass


class TimedOut(HarnessError):
    """A bounded wait expired.

    ``last_observed`` is the last value (or ignored exception) the predicate
    produced before the deadline.
    """

    def __init__(self, description, timeout, last_observed=None):
        self.description = description
        self.timeout = timeout
        self.last_observed = last_observed
        super().__init__(
            f"Timed out after {timeout:.2f}s waiting for {description} "
            f"(last observed: {last_observed!r})"
        )


class EntityNotFound(HarnessError):
    """No note matching the query exists in the current view."""

    def __init__(self, text):
        self.text = text
        super().__init__(f"Note matching {text!r} not found")


class AffordanceNotFound(HarnessError):
    """A control the operation needs is missing from the located subtree."""

    def __init__(self, name, text=None):
        self.name = name
        self.text = text
        detail = f" for {text!r}" if text is not None else ""
        super().__init__(f"Affordance '{name}'{detail} not found")


class NavigationFailed(HarnessError):
    """A view transition never showed its arrival signal."""

    def __init__(self, view, cause):
        self.view = view
        self.cause = cause
        super().__init__(f"Failed to navigate to {view.value}: {cause}")


class StaleElementError(HarnessError):
    """An element reference was used after the list re-rendered."""
    pass
