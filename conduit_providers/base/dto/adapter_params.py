"""Typed parameter object for provider adapter initialization.

Purpose
-------
Provide a small, provider-agnostic DTO that captures common initialization
parameters accepted by :meth:`ProviderFactory.create`. This reduces long
argument lists and keeps a stable contract at the registry boundary.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O side effects. Validation errors may be raised by
  Pydantic if inputs are of incorrect types or out of range.

Notes
-----
- Credentials are not parameters: they come from the config store and
  never travel through call sites or logs.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common provider adapter initialization parameters.

    Attributes
    ----------
    model:
        Model identifier overriding the provider's default model.
    host:
        Base URL overriding the provider's host config key.
    context_limit:
        Optional context-window hint for the model.
    temperature:
        Optional sampling temperature forwarded to the backend.
    max_tokens:
        Optional completion token cap forwarded to the backend.
    timeout_seconds:
        Optional per-request HTTP timeout; defaults come from
        :func:`get_timeout_config`.
    max_attempts:
        Optional retry attempt ceiling overriding the default retry policy.
    """

    model: Optional[str] = None
    host: Optional[str] = None
    context_limit: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    max_attempts: Optional[int] = Field(default=None, ge=1)


__all__ = ["AdapterParams"]
