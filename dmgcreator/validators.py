"""Input validators for form fields; each raises ValueError on bad input."""


def not_empty(value):
    """Reject an empty string."""
    if value == "":
        raise ValueError("cannot be blank")


def no_spaces(value):
    """Reject a string that contains a space or is empty."""
    if " " in value:
        raise ValueError("cannot contain spaces")
    not_empty(value)


def optional_no_spaces(value):
    """Accept an empty string; otherwise apply no_spaces."""
    if value == "":
        return
    no_spaces(value)