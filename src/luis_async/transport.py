"""Callback-based transports that reach the LUIS prediction endpoint."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any, Optional, Protocol

import httpx

from luis_async.config import ClientConfig
from luis_async.models import RecognitionResult

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[RecognitionResult], None]
FailureCallback = Callable[[Any], None]

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


class TransportFailure(RuntimeError):
    """Raised when the transport reports a failed recognition call.

    Attributes:
        payload: Whatever the transport handed to its failure callback.
        status_code: HTTP status of the failed call, when there was one.
    """

    def __init__(
        self,
        payload: Any,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(str(payload))
        self.payload = payload
        self.status_code = status_code


class RecognitionTransport(Protocol):
    """Two-callback contract of the wrapped recognition SDK.

    Each call must invoke exactly one of the callbacks, exactly once.
    """

    def submit(
        self,
        text: str,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None: ...

    def continue_dialog(
        self,
        text: str,
        prior_result: RecognitionResult,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
        force_set_parameter_name: Optional[str] = None,
    ) -> None: ...


class HttpLuisTransport:
    """Minimal LUIS v2 transport over ``httpx``.

    Calls return immediately; the request runs as a task on the current
    event loop and reports back through the supplied callbacks.
    """

    def __init__(
        self,
        config: ClientConfig,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config
        self._url = f"{config.endpoint.rstrip('/')}/{config.application_id}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)
        self._pending: set[asyncio.Task[None]] = set()

    def submit(
        self,
        text: str,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        if not text or not text.strip():
            on_failure(TransportFailure("Text to recognize must not be empty."))
            return

        self._schedule(self._build_params(text), on_success, on_failure)

    def continue_dialog(
        self,
        text: str,
        prior_result: RecognitionResult,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
        force_set_parameter_name: Optional[str] = None,
    ) -> None:
        if not text or not text.strip():
            on_failure(TransportFailure("Text to recognize must not be empty."))
            return

        context_id = prior_result.dialog.context_id if prior_result.dialog else None
        if not context_id:
            on_failure(
                TransportFailure("Prior result has no dialog context ID to continue.")
            )
            return

        params = self._build_params(text)
        params["contextId"] = context_id
        if force_set_parameter_name:
            params["forceSet"] = force_set_parameter_name
        self._schedule(params, on_success, on_failure)

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    def _build_params(self, text: str) -> dict[str, str]:
        return {
            "q": text,
            "verbose": "true" if self._config.verbose else "false",
        }

    def _schedule(
        self,
        params: dict[str, str],
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        task = asyncio.get_running_loop().create_task(
            self._query(params, on_success, on_failure)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _query(
        self,
        params: dict[str, str],
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        if self._config.verbose:
            logger.debug(
                f"LUIS request: app={self._config.application_id} q={params['q']!r}"
                f" contextId={params.get('contextId')}"
            )

        try:
            response = await self._client.get(
                self._url,
                params=params,
                headers={SUBSCRIPTION_KEY_HEADER: self._config.subscription_key},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(f"LUIS returned HTTP {exc.response.status_code}")
            failure = TransportFailure(
                f"LUIS request failed with HTTP {exc.response.status_code}: "
                f"{exc.response.text}",
                status_code=exc.response.status_code,
            )
            failure.__cause__ = exc
            on_failure(failure)
            return
        except httpx.RequestError as exc:
            logger.error(f"LUIS network error: {exc}")
            failure = TransportFailure(f"LUIS request could not be sent: {exc}")
            failure.__cause__ = exc
            on_failure(failure)
            return
        except json.JSONDecodeError as exc:
            logger.error(f"LUIS returned an undecodable body: {exc}")
            failure = TransportFailure(
                "LUIS response was not valid JSON.",
                status_code=response.status_code,
            )
            failure.__cause__ = exc
            on_failure(failure)
            return
        except Exception as exc:
            # Every call must end in a callback, or the awaiting caller hangs.
            logger.error(f"Unexpected LUIS transport error: {exc}", exc_info=True)
            on_failure(exc)
            return

        if self._config.verbose:
            logger.debug(f"LUIS response: {payload}")

        if not isinstance(payload, dict):
            on_failure(
                TransportFailure(
                    "LUIS response was not a JSON object.",
                    status_code=response.status_code,
                )
            )
            return

        try:
            result = RecognitionResult.from_json(payload)
        except (AttributeError, KeyError, TypeError) as exc:
            failure = TransportFailure(
                f"LUIS response had an unexpected shape: {exc}",
                status_code=response.status_code,
            )
            failure.__cause__ = exc
            on_failure(failure)
            return

        on_success(result)
