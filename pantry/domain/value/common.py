"""Value object base."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Frozen model compared by its fields."""

    model_config = ConfigDict(frozen=True)
