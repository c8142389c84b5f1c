"""
Business error kinds.

Every use case reports a rule violation as one of these. Anything that is a
plain ``Error`` is an infrastructure failure and maps to a server error.
"""

from libs.result import Error


class NotFound(Error):
    """Referenced entity does not exist"""


class Conflict(Error):
    """Uniqueness or state-transition violation"""


class Forbidden(Error):
    """Caller lacks ownership, crosses tenants, or breaks a protected rule"""
