from __future__ import annotations


class ClinicError(Exception):
    """Base class for every error raised by the registry."""


class ValidationError(ClinicError, ValueError):
    """A required field is empty, or an integer does not parse."""


class UnresolvedReferenceError(ClinicError, LookupError):
    """An operation referenced a patient, doctor or appointment ID that does not exist."""
