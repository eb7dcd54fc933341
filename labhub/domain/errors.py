class InvalidArgument(ValueError):
    """Malformed or out-of-range input (empty strings, unknown enum values, bad counts)."""
