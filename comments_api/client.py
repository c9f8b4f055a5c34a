"""Comments API client.

A thin wrapper around the comment routes of the HTTP service, built on
the ``requests`` library.  It exposes one method per operation:

* :meth:`CommentsAPI.list_comments` – return all comments.
* :meth:`CommentsAPI.get_comment` – fetch a single comment by id.
* :meth:`CommentsAPI.create_comment` – create a new comment.
* :meth:`CommentsAPI.upsert_comment` – update a comment by id or create it.
* :meth:`CommentsAPI.delete_comment` – delete a comment by id.

Every method returns a ``(data, error)`` tuple.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with the keys ``status_code`` and ``message``.  The message is the
``detail`` string reported by the service (e.g. ``Field email is
absent``), so callers can show it to users as is.

The service mounts the resource at ``/api/v1/comments`` by default.
Deployments started with ``API_PREFIX=/api`` serve the classic
``/api/comments`` path instead; pass ``api_prefix="/api"`` to talk to
them::

    api = CommentsAPI(base_url="http://localhost:3000", api_prefix="/api")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)


class CommentsAPI:
    """Client for the comments service."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:3000``.
            api_prefix: Prefix the versioned router is mounted under.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def comments_url(self) -> str:
        return f"{self.base_url}{self.api_prefix}/comments"

    def _request(
        self, method: str, url: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request and decode the JSON response.

        Returns:
            A tuple ``(data, error)``.
        """
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def list_comments(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", self.comments_url)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def get_comment(self, comment_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._request("GET", f"{self.comments_url}/{comment_id}")

    def create_comment(self, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Create a comment.

        Returns:
            A tuple ``(comment_id, error)``.
        """
        data, error = self._request("POST", self.comments_url, json_body=payload)
        if error:
            return None, error
        return (data or {}).get("id"), None

    def upsert_comment(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Update the comment named by ``payload["id"]`` or create a new one.

        Returns:
            A tuple ``(comment, error)`` with the resulting comment.
        """
        return self._request("PATCH", self.comments_url, json_body=payload)

    def delete_comment(self, comment_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Delete a comment.

        Returns:
            A tuple ``(removed_comment, error)``.
        """
        return self._request("DELETE", f"{self.comments_url}/{comment_id}")
