"""Typed failures raised by the domain helpers and translated at the view edge."""


class SiteBackendError(Exception):
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def as_payload(self):
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationFailed(SiteBackendError):
    status_code = 400


class NotFound(SiteBackendError):
    status_code = 404


class UpstreamError(SiteBackendError):
    """A data-store or blob-store call failed."""
    status_code = 500


class BlobStoreError(Exception):
    pass


class ObjectExistsError(BlobStoreError):
    pass
