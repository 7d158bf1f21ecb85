"""Client for the import preview/confirm API with abstract interface for loose coupling"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Union

import httpx
from pydantic import ValidationError

from src.academy_admin.config import settings
from src.academy_admin.schemas.imports import ConfirmRequest, ConfirmResult, PreviewResult
from src.academy_admin.services.preferences import AUTH_TOKEN_KEY, PreferenceStore

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."


class ImportApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpiredError(ImportApiError):
    pass


class ImportApi(ABC):
    @abstractmethod
    async def preview(
        self,
        entity_type: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None
    ) -> PreviewResult:
        pass

    @abstractmethod
    async def confirm(self, entity_type: str, request: ConfirmRequest) -> ConfirmResult:
        pass


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("detail")
        if isinstance(message, str) and message:
            return message
    return f"Request failed: {response.reason_phrase or response.status_code}"


class HttpImportApi(ImportApi):
    def __init__(
        self,
        preferences: Optional[PreferenceStore] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.preferences = preferences
        self.base_url = base_url or settings.API_BASE_URL
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        self._transport = transport

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        token = self.preferences.get(AUTH_TOKEN_KEY) if self.preferences else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _handle_response(self, response: httpx.Response) -> Any:
        if response.status_code in (401, 403):
            if self.preferences:
                self.preferences.clear_auth()
            raise SessionExpiredError(SESSION_EXPIRED_MESSAGE, response.status_code)
        if response.is_error:
            raise ImportApiError(_error_message(response), response.status_code)
        try:
            return response.json()
        except ValueError:
            raise ImportApiError("Server returned an invalid response", response.status_code)

    async def _post(self, path: str, **kwargs) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport
        ) as client:
            try:
                response = await client.post(path, headers=self._headers(), **kwargs)
            except httpx.HTTPError as e:
                logger.warning(f"Request to {path} failed: {e}")
                raise ImportApiError(str(e) or "Network error") from e
        return self._handle_response(response)

    async def preview(
        self,
        entity_type: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None
    ) -> PreviewResult:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        payload = await self._post(f"/import/preview/{entity_type}", files=files)
        try:
            return PreviewResult.model_validate(payload)
        except ValidationError as e:
            raise ImportApiError(f"Unexpected preview response: {e.error_count()} invalid field(s)") from e

    async def confirm(self, entity_type: str, request: ConfirmRequest) -> ConfirmResult:
        payload = await self._post(
            f"/import/confirm/{entity_type}",
            json=request.model_dump(by_alias=True)
        )
        try:
            return ConfirmResult.model_validate(payload)
        except ValidationError as e:
            raise ImportApiError(f"Unexpected confirm response: {e.error_count()} invalid field(s)") from e


@dataclass
class PreviewCall:
    entity_type: str
    filename: str
    content: bytes
    content_type: Optional[str]


@dataclass
class ConfirmCall:
    entity_type: str
    request: ConfirmRequest


class MockImportApi(ImportApi):
    """Records every call and answers with the configured result or raises the configured error."""

    def __init__(
        self,
        preview_response: Optional[Union[PreviewResult, Exception]] = None,
        confirm_response: Optional[Union[ConfirmResult, Exception]] = None
    ):
        self.preview_response = preview_response
        self.confirm_response = confirm_response
        self.preview_calls: List[PreviewCall] = []
        self.confirm_calls: List[ConfirmCall] = []

    async def preview(
        self,
        entity_type: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None
    ) -> PreviewResult:
        self.preview_calls.append(PreviewCall(entity_type, filename, content, content_type))
        if isinstance(self.preview_response, Exception):
            raise self.preview_response
        if self.preview_response is None:
            raise ImportApiError("No preview response configured")
        return self.preview_response

    async def confirm(self, entity_type: str, request: ConfirmRequest) -> ConfirmResult:
        self.confirm_calls.append(ConfirmCall(entity_type, request))
        if isinstance(self.confirm_response, Exception):
            raise self.confirm_response
        if self.confirm_response is None:
            return ConfirmResult(imported=len(request.data))
        return self.confirm_response
