from abc import ABC, abstractmethod

from httpx import Request


class AuthStrategy(ABC):
    """Abstract base class for authentication strategies"""

    @abstractmethod
    def authenticate(self, request: Request):
        """Apply authentication to the request"""
        pass


class BearerTokenAuth(AuthStrategy):
    """Sends the API key as 'Authorization: Bearer <key>'"""
    header_name: str = "Authorization"
    header_prefix: str = "Bearer"

    def __init__(self, token: str):
        self.__token = token

    def authenticate(self, request: Request):
        request.headers[self.header_name] = f"{self.header_prefix} {self.__token}"
