"""
BlockNotes — Notes API Client
===============================

What:  Async HTTP client for the /api/notes endpoints.
How:   One httpx.AsyncClient per NotesApiClient. Transport errors and non-2xx
       responses are raised as ApiRequestError; responses are parsed into
       the same pydantic models the server returns.
Who:   Used by the dashboard and note page controllers.

No retries: a failed request surfaces immediately so the page can show its
error banner.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from blocknotes.config import settings
from blocknotes.exceptions import ApiRequestError
from blocknotes.schemas.note import NoteListResponse, NoteOut

logger = logging.getLogger(__name__)


def _content_payload(content: Any) -> Any:
    if isinstance(content, list):
        return [item if isinstance(item, dict) else item.model_dump(mode="json") for item in content]
    return content


def _error_message(response: httpx.Response) -> str:
    """The server's `message` field when the body is our JSON error shape."""
    if response.headers.get("content-type", "").startswith("application/json"):
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return response.reason_phrase or "Request failed"


class NotesApiClient:
    """
    Args:
        base_url:  server root, e.g. "http://localhost:8000" (default from settings)
        timeout:   per-request timeout in seconds (default from settings)
        transport: optional httpx transport; tests pass ASGITransport(app)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or settings.request_timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "NotesApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiRequestError(
                message=f"Could not reach the notes API: {exc}",
                context={"method": method, "path": path},
            ) from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s returned %d: %s", method, path, response.status_code, message)
            raise ApiRequestError(
                message=message,
                status_code=response.status_code,
                context={"method": method, "path": path},
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s %s returned a non-JSON body", method, path)
            raise ApiRequestError(
                message="Invalid response from the notes API",
                status_code=response.status_code,
                context={"method": method, "path": path},
            ) from exc

    # ── Endpoints ─────────────────────────────────────────────────────────

    async def list_notes(self) -> NoteListResponse:
        data = await self._request("GET", "/api/notes")
        return NoteListResponse.model_validate(data)

    async def get_note(self, note_id: str) -> NoteOut:
        data = await self._request("GET", f"/api/notes/{note_id}")
        return NoteOut.model_validate(data["note"])

    async def create_note(self, title: str, content: Union[List[Any], str, None] = None) -> str:
        """Returns the id assigned by the server."""
        body = {"title": title, "content": _content_payload(content if content is not None else [])}
        data = await self._request("POST", "/api/notes", json=body)
        return data["id"]

    async def update_note(self, note_id: str, title: str, content: Union[List[Any], str]) -> None:
        body = {"id": note_id, "title": title, "content": _content_payload(content)}
        await self._request("PUT", "/api/notes", json=body)

    async def delete_note(self, note_id: str) -> None:
        await self._request("DELETE", "/api/notes", params={"id": note_id})
