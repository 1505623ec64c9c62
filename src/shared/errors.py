"""Failures raised by external collaborators and session guards.

None of these are retried by the storefront. They propagate to the caller
(usually an API route) which reports them and does not advance a multi-step
flow such as checkout.
"""


class CollaboratorError(Exception):
    """An external service rejected or failed a request."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ObjectStoreError(CollaboratorError):
    """Reading or writing a durable record failed."""

    user_message = "We could not save your changes. Please try again."


class BlobStoreError(CollaboratorError):
    """Uploading a file or resolving its public URL failed."""

    user_message = "We could not upload the image. Please try again."


class IdentityError(CollaboratorError):
    """The identity provider failed."""

    user_message = "We could not reach the sign-in service. Please try again."


class AuthenticationFailed(IdentityError):
    """The identity provider rejected the credentials."""

    user_message = "Invalid email or password."


class NotificationFailed(CollaboratorError):
    """No seller notification channel delivered the new order."""

    user_message = "There was a problem placing your order. Please try again."


class DescriptionUnavailable(CollaboratorError):
    """The description writer could not produce text."""

    user_message = "Description suggestions are unavailable right now."


class SessionRequired(Exception):
    """The operation needs an authenticated principal."""

    def __init__(self, operation: str):
        super().__init__(f"Sign in required to {operation}")
        self.operation = operation
