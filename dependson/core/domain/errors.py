from __future__ import annotations


class CustomPredicateError(RuntimeError):
    """A caller-supplied predicate raised or returned a non-boolean."""

    def __init__(self, token: str, message: str) -> None:
        super().__init__(f"custom qualifier '{token}': {message}")
        self.token = token
