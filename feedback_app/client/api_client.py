import logging
import re
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple

import httpx
from pydantic import BaseModel

from feedback_app.client.query_cache import QueryCache
from feedback_app.services.aggregation_service import build_summary, build_tabular_view

logger = logging.getLogger(__name__)

FORMS_LIST = ("Forms", "LIST")
RESPONSES_LIST = ("Responses", "LIST")

_FILENAME_PATTERN = re.compile(r'filename="?([^";]+)"?')


class ApiError(Exception):
    """Non-2xx answer from the API, carrying the server's message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class AuthRequiredError(Exception):
    """An admin operation was attempted without signing in first."""


def _as_json(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class FeedbackApiClient:
    """
    Typed calls against the feedback forms API with a tag-invalidated cache.

    Reads are served from ``cache`` until a mutation invalidates the tags
    they provided. Admin operations require a token obtained through
    ``register`` or ``login``.

    Pass ``http`` to reuse an existing ``httpx.Client`` (for example
    FastAPI's ``TestClient``).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
        cache: Optional[QueryCache] = None,
    ):
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.cache = cache or QueryCache()
        self.token: Optional[str] = None
        self.user: Optional[dict] = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._owns_http:
            self._http.close()

    # -- plumbing ---------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _require_auth(self):
        if not self.is_authenticated:
            raise AuthRequiredError("Sign in before calling admin endpoints")

    def _request(self, method: str, path: str, auth: bool = False, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if auth:
            self._require_auth()
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"[API CLIENT] {method} {path} failed: {e}")
            raise

        if response.is_error:
            try:
                message = response.json().get("message", response.reason_phrase)
            except ValueError:
                message = response.text or response.reason_phrase
            logger.debug(f"[API CLIENT] {method} {path} -> {response.status_code} {message}")
            raise ApiError(response.status_code, message)
        return response

    def _data(self, method: str, path: str, auth: bool = False, **kwargs) -> Any:
        return self._request(method, path, auth=auth, **kwargs).json()["data"]

    # -- auth -------------------------------------------------------------

    def _sign_in(self, payload: dict) -> dict:
        self.token = payload["token"]
        self.user = {key: payload[key] for key in ("id", "name", "email")}
        # Another account must not see the previous account's cached reads
        self.cache.clear()
        return self.user

    def register(self, name: str, email: str, password: str) -> dict:
        payload = self._data("POST", "/api/auth/register", json={
            "name": name, "email": email, "password": password,
        })
        return self._sign_in(payload)

    def login(self, email: str, password: str) -> dict:
        payload = self._data("POST", "/api/auth/login", json={"email": email, "password": password})
        return self._sign_in(payload)

    def logout(self):
        self.token = None
        self.user = None
        self.cache.clear()

    # -- forms ------------------------------------------------------------

    def create_form(
        self,
        title: str,
        questions: Iterable[Any],
        description: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> dict:
        body = {
            "title": title,
            "description": description,
            "questions": [_as_json(question) for question in questions],
            "expiresAt": _as_json(expires_at),
        }
        form = self._data("POST", "/api/forms", auth=True, json=body)
        self.cache.invalidate([FORMS_LIST])
        return form

    def get_admin_forms(self) -> List[dict]:
        self._require_auth()
        return self.cache.fetch(
            ("getAdminForms",),
            [FORMS_LIST],
            lambda: self._data("GET", "/api/forms", auth=True),
        )

    def get_form(self, form_id: str) -> dict:
        return self.cache.fetch(
            ("getFormById", form_id),
            [("Form", form_id)],
            lambda: self._data("GET", f"/api/forms/{form_id}"),
        )

    def get_admin_form_details(self, form_id: str) -> dict:
        self._require_auth()
        return self.cache.fetch(
            ("getAdminFormDetails", form_id),
            [("Form", form_id)],
            lambda: self._data("GET", f"/api/forms/{form_id}/admin-details", auth=True),
        )

    def delete_form(self, form_id: str) -> dict:
        result = self._data("DELETE", f"/api/forms/{form_id}", auth=True)
        self.cache.invalidate([FORMS_LIST, ("Form", form_id), ("Responses", form_id), RESPONSES_LIST])
        return result

    # -- responses --------------------------------------------------------

    def submit_response(self, form_id: str, answers: Iterable[Any]) -> dict:
        result = self._data("POST", "/api/responses", json={
            "formId": form_id,
            "answers": [_as_json(answer) for answer in answers],
        })
        self.cache.invalidate([("Responses", form_id)])
        return result

    def get_form_responses(self, form_id: str) -> List[dict]:
        self._require_auth()
        return self.cache.fetch(
            ("getFormResponses", form_id),
            [("Responses", form_id), RESPONSES_LIST],
            lambda: self._data("GET", f"/api/forms/{form_id}/responses", auth=True),
        )

    def export_csv(self, form_id: str) -> Tuple[str, bytes]:
        """Download the CSV export; returns ``(filename, content)``."""
        response = self._request("GET", f"/api/forms/{form_id}/responses/export-csv", auth=True)
        match = _FILENAME_PATTERN.search(response.headers.get("content-disposition", ""))
        filename = match.group(1) if match else f"{form_id}_responses.csv"
        return filename, response.content

    def get_response_views(self, form_id: str) -> dict:
        """Tabular and summary views built locally from the cached reads."""
        form = self.get_admin_form_details(form_id)
        responses = self.get_form_responses(form_id)
        return {
            "tabular": build_tabular_view(form, responses),
            "summary": build_summary(form, responses),
        }
