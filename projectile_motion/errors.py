"""
Error Types
===========
Invalid-input conditions for the physics core. Everything is rejected at
construction time; nothing is raised once a flight is under way.
"""


class InvalidParameterError(ValueError):
    """A launch or configuration parameter is outside its valid domain."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}={value!r}: {reason}")
