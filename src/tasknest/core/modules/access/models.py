from enum import StrEnum


class AccessDecision(StrEnum):
    """Where a guarded page should send the visitor."""

    ALLOW = "allow"
    REGISTER = "register"  # no accounts exist yet
    LOGIN = "login"  # accounts exist, nobody is logged in
