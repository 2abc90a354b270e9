"""
Custom Database Exceptions for HireLink

This module provides custom exception classes for database operations:
- ConcurrentModificationError: Raised when optimistic locking fails

Status writes on applications compare the row's version before updating,
so two workers racing on the same record cannot both win.
"""


class ConcurrentModificationError(Exception):
    """
    Exception raised when optimistic locking detects a concurrent modification.

    This occurs when two processes attempt to update the same record
    simultaneously, and the version number has changed since the record
    was read.

    Attributes:
        model_name: The name of the model class.
        object_id: The primary key of the object.
        expected_version: The version number expected by the updater.
        actual_version: The current version number in the database.
    """

    def __init__(
        self,
        model_name: str = None,
        object_id=None,
        expected_version: int = None,
        actual_version: int = None,
        message: str = None
    ):
        self.model_name = model_name
        self.object_id = object_id
        self.expected_version = expected_version
        self.actual_version = actual_version

        if message:
            self.message = message
        else:
            self.message = (
                f"Concurrent modification detected for {model_name} "
                f"(id={object_id}). Expected version {expected_version}, "
                f"but found version {actual_version}."
            )

        super().__init__(self.message)

    def __str__(self):
        return self.message
