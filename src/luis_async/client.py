"""Async facade over the callback-based LUIS transport."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from luis_async.config import DEFAULT_ENDPOINT, ClientConfig
from luis_async.models import RecognitionResult
from luis_async.transport import (
    FailureCallback,
    HttpLuisTransport,
    RecognitionTransport,
    SuccessCallback,
    TransportFailure,
)

logger = logging.getLogger(__name__)


class NoResultAvailableError(RuntimeError):
    """Raised when an accessor is used before a successful submission."""


class LuisClient:
    """Provides awaitable access to a LUIS app.

    ``recognize`` and ``converse`` return results directly. ``submit_and_store``
    keeps the latest result on the instance for ``top_intent_name`` and
    ``first_entity_value``. Concurrent ``submit_and_store`` calls on one
    instance race; serialize them if the stored result must be the latest one.
    """

    def __init__(
        self,
        application_id: str,
        subscription_key: str,
        verbose: bool = True,
        transport: Optional[RecognitionTransport] = None,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the client. No request is sent until a submission.

        Args:
            application_id: GUID of the LUIS app, from luis.ai.
            subscription_key: LUIS subscription key from the Azure Portal.
            verbose: Verbosity flag forwarded to the transport.
            transport: Optional transport; defaults to HttpLuisTransport.
            endpoint: LUIS v2 apps base URL for the default transport.
            timeout_seconds: HTTP timeout for the default transport.
        """
        self._config = ClientConfig(
            application_id=application_id,
            subscription_key=subscription_key,
            verbose=verbose,
            endpoint=endpoint,
            timeout_seconds=timeout_seconds,
        )
        if transport is None:
            transport = HttpLuisTransport(self._config)
        self._transport = transport
        self._last_result: RecognitionResult | None = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: Optional[RecognitionTransport] = None,
    ) -> "LuisClient":
        """Create a client from the application config."""

        return cls(
            application_id=config.application_id,
            subscription_key=config.subscription_key,
            verbose=config.verbose,
            transport=transport,
            endpoint=config.endpoint,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def application_id(self) -> str:
        return self._config.application_id

    @property
    def subscription_key(self) -> str:
        return self._config.subscription_key

    @property
    def verbose(self) -> bool:
        return self._config.verbose

    @property
    def last_result(self) -> RecognitionResult | None:
        """Result of the last successful ``submit_and_store``, if any."""
        return self._last_result

    async def recognize(self, text: str) -> RecognitionResult:
        """Send ``text`` to LUIS and return the recognized intent and entities.

        Args:
            text: The user's message.

        Returns:
            RecognitionResult from the transport.

        Raises:
            TransportFailure: If the transport reported a non-exception failure.
            Exception: Any exception the transport reported, unchanged.
        """
        future, on_success, on_failure = self._completion()
        self._transport.submit(text, on_success, on_failure)
        return await future

    async def converse(
        self,
        text: str,
        prior_result: RecognitionResult,
        force_set_parameter_name: Optional[str] = None,
    ) -> RecognitionResult:
        """Continue a LUIS dialog started by ``prior_result``.

        Args:
            text: The user's reply.
            prior_result: Earlier result that holds the dialog context.
            force_set_parameter_name: Sets the ``forceSet`` query parameter.

        Returns:
            RecognitionResult from the transport.
        """
        future, on_success, on_failure = self._completion()
        self._transport.continue_dialog(
            text,
            prior_result,
            on_success,
            on_failure,
            force_set_parameter_name,
        )
        return await future

    async def submit_and_store(self, text: str) -> None:
        """Send ``text`` to LUIS and keep the result on this instance.

        The stored result is cleared before the request goes out and is not
        restored if the request fails.
        """
        self._last_result = None
        self._last_result = await self.recognize(text)

    def top_intent_name(self) -> str:
        """Return the top scoring intent name, e.g. "None".

        Raises:
            NoResultAvailableError: If no submission has succeeded.
        """
        result = self._require_result()
        return result.top_intent.name

    def first_entity_value(self, entity_type: str) -> str | None:
        """Return the value of the first entity of ``entity_type``.

        The canonical form wins over the recognized text. Later entities of
        the same type are ignored.

        Returns:
            The entity value, or None if no entity of that type was found.

        Raises:
            NoResultAvailableError: If no submission has succeeded.
        """
        result = self._require_result()
        for entity in result.entities:
            if entity.type == entity_type:
                return entity.value
        return None

    async def aclose(self) -> None:
        """Release transport resources."""
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "LuisClient":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.aclose()

    def _require_result(self) -> RecognitionResult:
        result = self._last_result
        if result is None or result.top_intent is None:
            raise NoResultAvailableError(
                "No LUIS response is available yet. "
                "Make sure to await client.submit_and_store(text) first."
            )
        return result

    def _completion(
        self,
    ) -> tuple[asyncio.Future[RecognitionResult], SuccessCallback, FailureCallback]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[RecognitionResult] = loop.create_future()

        def settle(data: Any, failed: bool) -> None:
            if future.done():
                if not future.cancelled():
                    logger.warning("Ignoring extra LUIS transport callback")
                return
            if not failed:
                future.set_result(data)
            elif isinstance(data, BaseException):
                future.set_exception(data)
            else:
                future.set_exception(TransportFailure(data))

        def on_success(data: RecognitionResult) -> None:
            loop.call_soon_threadsafe(settle, data, False)

        def on_failure(data: Any) -> None:
            loop.call_soon_threadsafe(settle, data, True)

        return future, on_success, on_failure
