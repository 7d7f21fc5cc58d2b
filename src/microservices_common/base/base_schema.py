from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base for all configuration schemas."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)
