"""Entity base."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen entity; changes go through ``evolve`` and produce a new instance."""

    model_config = ConfigDict(frozen=True)
