"""User domain model."""

from uuid import UUID

from pydantic import BaseModel


class Principal(BaseModel):
    """Authenticated identity attached to a request.

    Built from a verified access token; no database lookup is involved.
    """

    id: UUID
    email: str
