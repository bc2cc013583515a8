"""
Exceptions.
"""

from typing import Optional

import httpx


class ResourceDefinitionError(ValueError):
    """
    The identity of a resource (kind, group, version) is invalid or incomplete.
    """

    pass


class ApiError(httpx.HTTPStatusError):
    status: dict

    def __init__(
        self, request: httpx.Request = None, response: httpx.Response = None
    ) -> None:
        self.status = response.json()
        super().__init__(self.message or "", request=request, response=response)

    @property
    def message(self) -> Optional[str]:
        return self.status.get("message")

    @property
    def reason(self) -> Optional[str]:
        return self.status.get("reason")

    @property
    def code(self) -> int:
        return self.status.get("code", self.response.status_code)


class LoadResourceError(Exception):
    """
    Error in loading a resource
    """
