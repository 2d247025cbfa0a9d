class MalformedInputError(ValueError):
    """CSV upload that cannot be turned into documents (bad structure, bad date/time)."""
