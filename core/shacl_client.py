# /core/shacl_client.py

from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from core.config import settings
from core.logger import get_logger
from core.models import (
    InferenceResult,
    LookupResult,
    SaveResult,
    ServiceStats,
    ShapeDefinition,
    ValidationReport,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

TEXT_HEADERS = {"Content-Type": "text/plain"}


class RemoteServiceError(Exception):
    """Raised when the shape/inference service is unreachable or answers with something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ShaclServiceClient:
    """
    Async client for the remote shape, inference and persistence service.

    Every call is independent: no retries, no cancellation. Failures of any
    kind surface as RemoteServiceError so callers can leave the buffer untouched.
    """

    def __init__(self, base_url: str = None, timeout: float = None, transport: httpx.AsyncBaseTransport = None):
        self.base_url = (base_url or settings.SHACL_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.info(f"{method} {url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise RemoteServiceError(f"Could not reach {url}: {e}") from e

        if not response.is_success:
            logger.error(f"{url} returned {response.status_code}: {response.text[:200]}")
            raise RemoteServiceError(f"{path} returned {response.status_code}", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteServiceError(f"{path} returned malformed JSON", status_code=response.status_code) from e

    @staticmethod
    def _validate(model: Type[ModelT], data: Any, path: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RemoteServiceError(f"{path} returned an unexpected payload: {e.error_count()} errors") from e

    async def get_stats(self) -> ServiceStats:
        data = await self._request("GET", "/stats")
        return self._validate(ServiceStats, data, "/stats")

    async def get_forms(self) -> Dict[str, ShapeDefinition]:
        """Shape id -> field definitions, used to build the entry form."""
        data = await self._request("GET", "/forms")
        if not isinstance(data, dict) or not isinstance(data.get("forms"), dict):
            raise RemoteServiceError("/forms returned an unexpected payload")
        return {
            shape_id: self._validate(ShapeDefinition, definition, "/forms")
            for shape_id, definition in data["forms"].items()
        }

    async def lookup(self, verb: str) -> LookupResult:
        data = await self._request("GET", "/lookup", params={"verb": verb})
        return self._validate(LookupResult, data, "/lookup")

    async def infer(self, text: str) -> InferenceResult:
        data = await self._request("POST", "/infer", content=text.encode("utf-8"), headers=TEXT_HEADERS)
        return self._validate(InferenceResult, data, "/infer")

    async def validate(self, text: str) -> ValidationReport:
        path = settings.VALIDATE_PATH
        data = await self._request("POST", path, content=text.encode("utf-8"), headers=TEXT_HEADERS)
        return self._validate(ValidationReport, data, path)

    async def save(self, text: str) -> SaveResult:
        data = await self._request("POST", "/save", content=text.encode("utf-8"), headers=TEXT_HEADERS)
        return self._validate(SaveResult, data, "/save")
