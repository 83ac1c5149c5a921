from tasknest.utils import is_email


def validate_credentials(email: str, password: str) -> str | None:
    """Check registration input.

    Requirements:
    - Email has the local@domain.tld shape
    - Password is not empty

    Returns:
        A user-facing message describing the first problem, or None when valid
    """
    if not is_email(email.strip()):
        return "Email address is not valid"

    if not password:
        return "Password is required"

    return None
