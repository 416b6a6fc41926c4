"""
Error taxonomy for commute calculations
Every error is terminal for the current request and carries a display message
"""


class CommuteError(Exception):
    """Base exception for commute calculation errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CommuteError):
    """Required input is missing or malformed"""
    pass


class NotFoundError(CommuteError):
    """An address did not resolve to any coordinate"""

    def __init__(self, address: str):
        super().__init__(f"Could not find: {address}")
        self.address = address


class RoutingError(CommuteError):
    """No viable route between two coordinates"""
    pass


class ServiceError(CommuteError):
    """Transport or payload failure talking to an upstream service"""
    pass
