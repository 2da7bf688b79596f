"""Typed exceptions raised by the Influence Explorer mapping.

- ParameterValidationError: a resolved parameter fails its validator/options
- TemplateError: URI template and declared parameters disagree (programming error)
- UpstreamFetchError: the HTTP fetch failed (transport, non-2xx, timeout)
- MalformedResponseError: the payload cannot be reshaped/decoded into records
- FieldCoercionError: a strict field getter received invalid input

Only the entity resolver absorbs failures; everything else propagates.
"""

from __future__ import annotations

from typing import Any


class InfluenceExplorerError(Exception):
    """Base class for mapping errors."""


class ParameterValidationError(InfluenceExplorerError, ValueError):
    """Raised before any request is sent when a parameter value is rejected."""

    def __init__(self, param: str, value: Any, reason: str = "invalid value") -> None:
        self.param = param
        self.value = value
        self.reason = reason
        super().__init__(f"Parameter '{param}' rejected value {value!r}: {reason}")


class TemplateError(InfluenceExplorerError, RuntimeError):
    """Raised when URI placeholders and declared parameters are inconsistent."""


class UpstreamFetchError(InfluenceExplorerError, RuntimeError):
    """Raised when the upstream GET fails; the original error is `__cause__`."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(InfluenceExplorerError, ValueError):
    """Raised when a payload does not decode into a record or record sequence."""


class FieldCoercionError(InfluenceExplorerError, ValueError):
    """Raised by strict getters (e.g. dates) on invalid input."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)
