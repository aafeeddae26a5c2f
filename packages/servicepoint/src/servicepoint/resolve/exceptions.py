# servicepoint/resolve/exceptions.py
"""Resolution exceptions"""
from servicepoint.exceptions import ServicePointError


class ResolutionError(ServicePointError): ...


class CandidateOrderingError(ResolutionError, RuntimeError):
    """Two candidates with unrelated subject types were compared.

    Raised by :func:`~servicepoint.resolve.candidates.compare_candidates`
    when no subject type is given to order by, for example two sibling
    mixins of the same subject.
    """
