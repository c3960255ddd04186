"""
Error types for the karaoke server and their HTTP status codes.
"""


class KaraokeError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class ValidationError(KaraokeError):
    """A required field is missing or the request carries nothing usable"""
    status_code = 400


class NotFoundError(KaraokeError):
    """Unknown song id on update/delete"""
    status_code = 404


class PersistenceError(KaraokeError):
    """The backing store cannot be reached or read at startup"""
    status_code = 500
