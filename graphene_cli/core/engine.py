"""
Analysis Engine Client
======================

The analyses themselves run in a Graphene server. This module defines the
narrow call contract the pipeline relies on (``AnalysisEngine``) and an
HTTP implementation of it (``GrapheneClient``).

Failed requests are retried with exponential backoff on timeouts,
connection errors and 5xx responses. Client errors (4xx) and invalid
requests (bad URL scheme or host) are not retried.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Protocol

import requests
import structlog
from pydantic import ValidationError

from .errors import AnalysisEngineError
from .models import CoreferenceContent, SimplificationContent

log = structlog.get_logger("graphene_cli.engine")


class AnalysisEngine(Protocol):
    """Call contract of the external analysis engine."""

    def coreference(self, text: str) -> CoreferenceContent: ...

    def simplify(
        self,
        text: str,
        do_coreference: bool,
        isolate_sentences: bool,
    ) -> SimplificationContent: ...

    def extract_relations(
        self,
        text: str,
        do_coreference: bool,
        isolate_sentences: bool,
        do_complex_categories: bool,
    ) -> SimplificationContent: ...

    def version_info(self) -> dict[str, Any]: ...


@dataclass
class EngineConfig:
    """Connection settings for a Graphene server."""

    url: str = "http://localhost:8080"
    timeout: float = 60.0
    max_retries: int = 3
    retry_delay: float = 1.0  # Base delay, doubles each retry


class GrapheneClient:
    """``AnalysisEngine`` backed by the Graphene REST API.

    Example:
        ```python
        client = GrapheneClient(EngineConfig(url="http://localhost:8080"))
        content = client.extract_relations(text, False, False, False)
        ```
    """

    COREFERENCE_PATH = "/coreference/text"
    SIMPLIFICATION_PATH = "/discourseSimplification/text"
    RELATION_EXTRACTION_PATH = "/relationExtraction/text"
    VERSION_PATH = "/admin/version"

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": "graphene-cli",
            }
        )

    def _url(self, path: str) -> str:
        return self.config.url.rstrip("/") + path

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        """Send a request with retries and return the decoded JSON body."""
        url = self._url(path)
        last_error = ""
        last_status: int | None = None

        for attempt in range(1, self.config.max_retries + 1):
            try:
                response = self.session.request(
                    method,
                    url,
                    json=payload,
                    timeout=self.config.timeout,
                )

                if 200 <= response.status_code < 300:
                    try:
                        return response.json()
                    except ValueError as e:
                        raise AnalysisEngineError(
                            f"Engine returned a non-JSON body from {path}",
                            status_code=response.status_code,
                        ) from e

                if 400 <= response.status_code < 500:
                    raise AnalysisEngineError(
                        f"Engine rejected request to {path}: {response.status_code}",
                        status_code=response.status_code,
                    )

                last_status = response.status_code
                last_error = f"Server error: {response.status_code}"

            except requests.exceptions.Timeout:
                last_error = "Request timed out"
            except requests.exceptions.ConnectionError as e:
                last_error = f"Connection error: {e}"
            except requests.exceptions.RequestException as e:
                # Invalid URL or request, not retried
                raise AnalysisEngineError(f"Engine request to {path} failed: {e}") from e

            if attempt < self.config.max_retries:
                delay = self.config.retry_delay * (2 ** (attempt - 1))
                log.warning(
                    "Engine request failed, retrying",
                    path=path,
                    attempt=attempt,
                    max_retries=self.config.max_retries,
                    delay=delay,
                    error=last_error,
                )
                time.sleep(delay)

        raise AnalysisEngineError(
            f"Engine request to {path} failed after {self.config.max_retries} attempts: {last_error}",
            status_code=last_status,
        )

    def _post_content(self, path: str, payload: dict[str, Any], model: type):
        body = self._request("POST", path, payload)
        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise AnalysisEngineError(f"Unexpected response from {path}: {e.error_count()} validation errors") from e

    def coreference(self, text: str) -> CoreferenceContent:
        log.debug("Requesting coreference", chars=len(text))
        return self._post_content(self.COREFERENCE_PATH, {"text": text}, CoreferenceContent)

    def simplify(
        self,
        text: str,
        do_coreference: bool,
        isolate_sentences: bool,
    ) -> SimplificationContent:
        log.debug("Requesting discourse simplification", chars=len(text))
        payload = {
            "text": text,
            "doCoreference": do_coreference,
            "isolateSentences": isolate_sentences,
            "format": "SERIALIZED",
        }
        return self._post_content(self.SIMPLIFICATION_PATH, payload, SimplificationContent)

    def extract_relations(
        self,
        text: str,
        do_coreference: bool,
        isolate_sentences: bool,
        do_complex_categories: bool,
    ) -> SimplificationContent:
        log.debug("Requesting relation extraction", chars=len(text))
        payload = {
            "text": text,
            "doCoreference": do_coreference,
            "isolateSentences": isolate_sentences,
            "doComplexCategories": do_complex_categories,
            "format": "SERIALIZED",
        }
        return self._post_content(self.RELATION_EXTRACTION_PATH, payload, SimplificationContent)

    def version_info(self) -> dict[str, Any]:
        body = self._request("GET", self.VERSION_PATH)
        if not isinstance(body, dict):
            raise AnalysisEngineError(f"Unexpected version record: {body!r}")
        return body

    def close(self) -> None:
        self.session.close()
