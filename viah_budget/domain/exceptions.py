"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class WeddingAPIError(DomainException):
    """Wedding API returned an error or is unavailable"""

    pass


class MalformedMilestoneError(DomainException):
    """Payment milestone data could not be parsed"""

    pass
