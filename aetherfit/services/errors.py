"""Failure taxonomy for the analysis pipeline."""


class AnalysisError(Exception):
    """Base class for every failure the pipeline recovers from."""


class TransportError(AnalysisError):
    """The generation service could not be reached or answered with an error status."""


class QuotaError(TransportError):
    """The generation service rejected the call for rate or quota reasons."""


class AuthError(AnalysisError):
    """The service credential is missing or was rejected."""


class ParseError(AnalysisError):
    """The generation service returned text that is not a JSON object."""


class SchemaViolation(AnalysisError):
    """The returned JSON lacks a required field or has the wrong type."""
