from pydantic import BaseModel, Field


class Actor(BaseModel):
    """The authenticated caller, as asserted by the bearer token."""

    email: str = Field(..., description="Caller identity, recorded as created_by / updated_by")
    role_id: int | None = Field(None, description="Role the caller is logged in as")
