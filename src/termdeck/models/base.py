"""Base model for termdeck's immutable values."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TermdeckModel(BaseModel):
    """Base for all frozen termdeck models."""

    model_config = ConfigDict(frozen=True)
