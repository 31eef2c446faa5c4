"""Memory backend that talks to an Engram server over its HTTP API.

Reads use ``GET /search`` (full-text, ``q`` required) and ``GET /export``
(every observation of a project). Writes first upsert a session with
``POST /sessions`` and then create the observation with
``POST /observations``. Engram's wire format is kept inside this module:
integer ids become strings and SQL timestamps become aware datetimes.
"""

from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from datetime import datetime, timezone
from typing import Any

from silo.config import Config
from silo.engram import EngramClient, EngramError, MockClient
from silo.models import Observation

DEFAULT_TIMEOUT = 10.0

#: Prefix of the session that groups every capture of one project.
SESSION_ID_PREFIX = "silo-save-"

#: Longest title derived from content, in characters.
TITLE_FALLBACK_MAX = 60

_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
_MAX_BODY = 64 << 20
_SNIPPET_MAX = 512
_LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


def _id_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        raise EngramError("engram: id must be a number")
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    raise EngramError("engram: id must be a number")


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise EngramError(f"engram: field {key!r} must be a string")
    return value


def _parse_created(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, _TIME_LAYOUT).replace(tzinfo=timezone.utc)
    except ValueError:
        pass
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(timezone.utc)


def observation_from_wire(data: dict) -> Observation:
    """Convert one Engram JSON observation into an :class:`Observation`.

    A missing numeric id falls back to ``sync_id``; an unparseable
    ``created_at`` leaves the timestamp unset.
    """
    if not isinstance(data, dict):
        raise EngramError("engram: observation must be a JSON object")
    obs_id = _id_string(data.get("id"))
    if not obs_id:
        obs_id = _text(data, "sync_id")
    return Observation(
        id=obs_id,
        title=_text(data, "title"),
        type=_text(data, "type"),
        content=_text(data, "content"),
        project=_text(data, "project"),
        topic_key=_text(data, "topic_key").strip(),
        created_at=_parse_created(_text(data, "created_at")),
    )


def _as_text(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def decode_observation_array(raw: bytes | str) -> list[Observation]:
    """Decode a ``/search`` body: a JSON array, or ``null`` for no matches."""
    body = _as_text(raw).strip()
    if not body or body == "null":
        return []
    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        raise EngramError(f"engram: decode observation array: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise EngramError("engram: decode observation array: expected a JSON array")
    return [observation_from_wire(item) for item in data]


def wire_title(observation: Observation) -> str:
    """A non-empty title for the wire, derived from content when none is set."""
    title = observation.title.strip()
    if title:
        return title
    content = observation.content.strip()
    if not content:
        return "Untitled capture"
    newline = content.find("\n")
    if newline > 0:
        content = content[:newline]
    if len(content) > TITLE_FALLBACK_MAX:
        return content[:TITLE_FALLBACK_MAX].rstrip(" \t") + "…"
    return content


class HTTPClient(EngramClient):
    """Engram backend reached over HTTP."""

    def __init__(self, endpoint: str, api_key: str = "", timeout: float = DEFAULT_TIMEOUT) -> None:
        if timeout <= 0:
            timeout = DEFAULT_TIMEOUT
        self._endpoint = endpoint.rstrip("/")
        self._api_key = api_key.strip()
        self._timeout = timeout
        self._direct = urllib.request.build_opener(urllib.request.ProxyHandler({}))
        self._default = urllib.request.build_opener()

    @property
    def endpoint(self) -> str:
        """Base URL without a trailing slash."""
        return self._endpoint

    def search(self, query: str) -> list[Observation]:
        """Full-text search; Engram rejects an empty query."""
        raw = self._request("GET", "/search", params={"q": query.strip()})
        return decode_observation_array(raw)

    def context(self, project: str) -> list[Observation]:
        """Every observation of ``project``, read from the export envelope."""
        params = {}
        if project.strip():
            params["project"] = project.strip()
        raw = self._request("GET", "/export", params=params)

        body = _as_text(raw).strip()
        if not body or body == "null":
            return []
        try:
            envelope = json.loads(body)
        except json.JSONDecodeError as exc:
            raise EngramError(f"engram: decode /export envelope: {exc}") from exc
        if envelope is None:
            return []
        if not isinstance(envelope, dict):
            raise EngramError("engram: decode /export envelope: expected a JSON object")
        items = envelope.get("observations")
        if items is None:
            return []
        if not isinstance(items, list):
            raise EngramError("engram: decode /export envelope: observations must be an array")
        return [observation_from_wire(item) for item in items]

    def save(self, observation: Observation) -> str:
        """Upsert the project's session, then create the observation."""
        if not observation.content.strip():
            raise EngramError("engram: Save requires non-empty Content")
        project = observation.project.strip()
        if not project:
            raise EngramError("engram: Save requires non-empty Project")

        session_id = SESSION_ID_PREFIX + project
        try:
            self._post_json("/sessions", {"id": session_id, "project": project})
        except EngramError as exc:
            raise EngramError(f"engram: bootstrap session: {exc}") from exc

        return self._post_observation(observation, session_id)

    def _post_observation(self, observation: Observation, session_id: str) -> str:
        payload = {
            "session_id": session_id,
            "title": wire_title(observation),
            "content": observation.content,
        }
        optional = {
            "project": observation.project.strip(),
            "type": observation.type.strip(),
            "topic_key": observation.topic_key.strip(),
            "why": observation.why.strip(),
        }
        payload.update({key: value for key, value in optional.items() if value})

        raw = self._post_json("/observations", payload)
        text = _as_text(raw)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise EngramError(f"engram: decode /observations response: {exc}") from exc
        if not isinstance(data, dict):
            raise EngramError("engram: decode /observations response: expected a JSON object")
        obs_id = _id_string(data.get("id"))
        if not obs_id:
            raise EngramError(f"engram: /observations response missing id: {text}")
        return obs_id

    def _post_json(self, path: str, payload: dict) -> bytes:
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        return self._request("POST", path, body=body)

    def _opener(self, url: str) -> urllib.request.OpenerDirector:
        host = (urllib.parse.urlsplit(url).hostname or "").lower()
        if host in _LOCAL_HOSTS or host.endswith(".localhost"):
            return self._direct
        return self._default

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> bytes:
        full = self._endpoint + path
        if params:
            full += "?" + urllib.parse.urlencode(sorted(params.items()))

        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json"
        if self._api_key:
            headers["Authorization"] = "Bearer " + self._api_key

        try:
            request = urllib.request.Request(full, data=body, headers=headers, method=method)
        except ValueError as exc:
            raise EngramError(f"engram: build {method} {full}: {exc}") from exc

        try:
            with self._opener(full).open(request, timeout=self._timeout) as response:
                status = response.status
                raw = response.read(_MAX_BODY)
        except urllib.error.HTTPError as exc:
            status = exc.code
            try:
                raw = exc.read(_MAX_BODY)
            except OSError:
                raw = b""
            finally:
                exc.close()
        except (urllib.error.URLError, OSError, ValueError) as exc:
            reason = getattr(exc, "reason", exc)
            raise EngramError(f"engram: {method} {full}: {reason}") from exc

        if status < 200 or status >= 300:
            snippet = _as_text(raw).strip()
            if len(snippet) > _SNIPPET_MAX:
                snippet = snippet[:_SNIPPET_MAX] + "…"
            raise EngramError(f"engram: {method} {full} returned {status}: {snippet}")
        return raw


def new_client(cfg: Config | None) -> EngramClient:
    """The mock backend when no endpoint is configured, else an HTTP client."""
    if cfg is None or not cfg.engram_endpoint.strip():
        return MockClient()
    return HTTPClient(cfg.engram_endpoint, cfg.engram_api_key, DEFAULT_TIMEOUT)