from __future__ import annotations


class RegistryError(Exception):
    """Base class for failures a registry caller is expected to handle."""


class ValidationError(RegistryError):
    """A required field is missing or empty."""


class MalformedInputError(RegistryError):
    """The request body or a path segment could not be decoded."""


class NotFoundError(RegistryError):
    def __init__(self, user_id: int):
        super().__init__(f"User ID {user_id} not found")
        self.user_id = user_id
