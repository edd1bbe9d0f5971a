"""
Domain errors raised by the services layer
Each carries the HTTP status the API answers with (see app/main.py handlers)
"""
from fastapi import status


class PortalError(Exception):
    """Base error for the portal; unexpected failures answer 500"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PortalError):
    """Board, job or candidate does not exist"""
    status_code = status.HTTP_404_NOT_FOUND


class BusinessRuleViolation(PortalError):
    """No vacancy, no job selected, invalid input combination"""
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidTransition(BusinessRuleViolation):
    """A status change not allowed by the entity's transition table"""

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(f"Invalid {entity} transition: {current} -> {target}")
        self.entity = entity
        self.current = current
        self.target = target
