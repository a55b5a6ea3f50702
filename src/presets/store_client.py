"""HTTP client for the remote preset store."""

from typing import Any, Dict, List, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from config import config
from config.logging_config import get_logger

logger = get_logger("preset_store")


def _is_retryable(error: BaseException) -> bool:
    """Transport failures and 5xx responses are worth another attempt; 4xx are not."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return isinstance(error, httpx.TransportError)


class PresetStoreClient:
    """
    Thin async wrapper over the preset store endpoints.

    Reads are retried with exponential backoff; writes are sent once.
    Errors are raised as ``httpx`` exceptions for the caller to translate.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retry_attempts: Optional[int] = None,
        retry_wait: float = 1.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Store root, e.g. ``http://localhost:8000/api``
            timeout: Request timeout in seconds
            retry_attempts: Attempts per read before giving up
            retry_wait: Backoff multiplier in seconds (0 disables waiting)
            client: Pre-built ``httpx.AsyncClient``; its base URL is used as is
        """
        store_config = config.preset_store
        self.base_url = (base_url or store_config.base_url).rstrip("/")
        self.retry_attempts = retry_attempts or store_config.retry_attempts
        self.retry_wait = retry_wait
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or store_config.timeout_seconds,
        )

    async def __aenter__(self) -> "PresetStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_wait, max=30),
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.debug(f"Retrying GET {path} (attempt {attempt.retry_state.attempt_number})")
                response = await self._client.get(path, params=params)
                response.raise_for_status()
                return response.json()

    async def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._client.request(method, path, json=payload)
        response.raise_for_status()
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    async def list_presets(self, artifact_type: str) -> List[Dict[str, Any]]:
        return await self._get("/presets", params={"type": artifact_type})

    async def create_preset(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._send("POST", "/presets", payload)

    async def delete_preset(self, artifact_type: str, preset_id: str) -> None:
        await self._send("DELETE", f"/presets/{artifact_type}/{preset_id}")

    # -------------------------------------------------------------------------
    # Default selections
    # -------------------------------------------------------------------------

    async def get_defaults(self) -> Dict[str, Optional[str]]:
        return await self._get("/defaults")

    async def put_default(self, context: str, preset_id: Optional[str]) -> Dict[str, Optional[str]]:
        return await self._send("PUT", "/defaults", {"context": context, "preset_id": preset_id})
