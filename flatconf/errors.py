"""Domain exceptions for document loading and CLI diagnostics."""

from __future__ import annotations


class ConfigLoadError(RuntimeError):
    """Raised when a configuration document cannot be loaded."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped load error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
