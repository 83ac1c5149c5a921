from tasknest.errors import ValidationError

MIN_TITLE_LENGTH = 3


def validate_title(title: str) -> str:
    """Validate a task title and return it stripped.

    Raises:
        ValidationError: If the title is shorter than three characters
    """
    stripped = title.strip()
    if len(stripped) < MIN_TITLE_LENGTH:
        raise ValidationError(f"Title must be at least {MIN_TITLE_LENGTH} characters long")
    return stripped
