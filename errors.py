# errors.py
"""Failure types for chunk reception.

Client errors are raised by the validator before any I/O happens and map to
HTTP 400. Server errors come from the writer and map to HTTP 500; the caller
is expected to restart the upload from chunk 0. A failed rename at finalize
time is reported separately through FinalizeError since no bytes were lost.
"""


class UploadError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientError(UploadError):
    status_code = 400


class ServerError(UploadError):
    status_code = 500


# client input errors

class MissingField(ClientError):
    pass


class InvalidIndex(ClientError):
    pass


class InvalidTotal(ClientError):
    pass


class IndexOutOfRange(ClientError):
    pass


class InvalidFileName(ClientError):
    pass


class MissingPayload(ClientError):
    pass


# server I/O errors

class CannotOpenWorkingFile(ServerError):
    pass


class WriteError(ServerError):
    pass


class IncompleteWrite(ServerError):
    pass


class StatError(ServerError):
    pass


class FinalizeError(Exception):
    """Working file is complete on disk but could not be promoted to its final name."""

    def __init__(self, part_path: str, final_path: str, cause: OSError):
        super().__init__(f"rename failed: {cause}")
        self.part_path = part_path
        self.final_path = final_path
        self.cause = cause
