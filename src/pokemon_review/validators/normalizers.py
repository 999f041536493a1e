def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()


def comparison_key(value: str | None) -> str:
    """
    Reduce a name or title to the form used by duplicate checks.

    Leading/trailing whitespace is dropped and the result is uppercased, so
    "Fire ", " fire" and "FIRE" all produce the same key. None maps to "".
    """
    if value is None:
        return ""
    return value.strip().upper()
