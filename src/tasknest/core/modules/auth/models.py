from pydantic import BaseModel


class AuthResult(BaseModel):
    """Outcome of a register or login attempt. The message is user-facing."""

    success: bool
    message: str
