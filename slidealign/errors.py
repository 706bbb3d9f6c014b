"""Exceptions raised by host adapters."""


class MutationError(Exception):
    """A host refused a geometry or content change on one object.

    Engines catch this per element and count it as a failure; any other
    exception coming out of a host is treated as unexpected and propagates.
    """

    def __init__(self, object_id: str, message: str) -> None:
        super().__init__(f"{object_id}: {message}")
        self.object_id = object_id
        self.message = message
