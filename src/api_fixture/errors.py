"""
Exception types raised by the step library.

Assertion failures derive from :class:`AssertionError` so that Gherkin runners
report them as failed steps. Everything else derives from :class:`FixtureError`
and is reported as an error in the step.
"""

from dataclasses import dataclass


class FixtureError(Exception):
    """
    Base class for errors which are not assertion failures.
    """


class ConfigurationError(FixtureError):
    """
    Raised when the session configuration is incomplete or invalid.
    """


class RequestConstructionError(FixtureError):
    """
    Raised when an outbound request cannot be built from the step parameters.
    """


@dataclass
class TransportError(FixtureError):
    """
    Raised when the HTTP request could not be completed.

    :param method: HTTP method of the failed request.
    :param url: Fully resolved URL of the failed request.
    :param reason: Description of the underlying transport failure.
    """

    method: str
    url: str
    reason: str

    def __str__(self) -> str:
        return f"failed to make request {self.method} {self.url}: {self.reason}"


class StepArgumentError(FixtureError):
    """
    Raised when a step receives input it cannot interpret.
    """


class TemporalParseError(FixtureError):
    """
    Raised when a value compared as a timestamp cannot be parsed as one.
    """


class ResponseAssertionError(AssertionError):
    """
    Raised when the last response does not satisfy an assertion.
    """


@dataclass
class PathNotFoundError(ResponseAssertionError):
    """
    Raised when a JSON path matches nothing in the response body.

    :param path: The dot-separated path exactly as it was queried.
    :param body: The prettified response body the path was resolved against.
    """

    path: str
    body: str

    def __str__(self) -> str:
        return f"'{self.path}' not found in response: {self.body}"
