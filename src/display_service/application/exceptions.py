from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class ValidationError(AppError):
    """Malformed input. ``context`` carries hints for the caller (e.g. valid values)."""

    def __init__(self, detail: str = "", **context: Any) -> None:
        super().__init__(detail)
        self.context = context
