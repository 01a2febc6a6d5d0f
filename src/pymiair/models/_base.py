"""Base model for pymiair data objects.

Every model inherits from :class:`MiAirBaseModel` which is frozen and
ignores unknown keys, so instances can be shared freely between the
synchronizer, the dispatcher and the host without defensive copies.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MiAirBaseModel(BaseModel):
    """Frozen pydantic base for pymiair models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
