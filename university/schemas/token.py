from pydantic import BaseModel


class Token(BaseModel):
    token: str
    role: str


class Claim(BaseModel):
    """Identity asserted by a verified access token."""

    user_id: int
    role: str
    first_name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
