"""Engine error types."""

from __future__ import annotations


class InvalidRectangleError(ValueError):
    """A rectangle with min >= max on some axis (or unusable coordinates)."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid rectangle at index {index}: {reason}")


class PipelineError(RuntimeError):
    """One or more transforms failed; carries the per-transform messages."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{tid}: {msg}" for tid, msg in sorted(self.errors.items()))
        super().__init__(f"Boundary pipeline failed ({detail})")
