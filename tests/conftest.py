"""Shared pytest fixtures for test infrastructure."""

from __future__ import annotations

from typing import Any, Optional

import pytest

from luis_async.client import LuisClient
from luis_async.models import RecognitionResult


class FakeTransport:
    """Recording transport that answers from a list of canned outcomes.

    Each outcome is either a RecognitionResult (success) or any other value,
    which is handed to the failure callback. With ``hold=True`` callbacks are
    captured instead of fired, so tests can observe in-flight state.
    """

    def __init__(self, outcomes: list[object] | None = None, hold: bool = False) -> None:
        self._outcomes = list(outcomes or [])
        self._hold = hold
        self.calls: list[dict[str, Any]] = []
        self.held: list[tuple[Any, Any]] = []

    def submit(self, text: str, on_success, on_failure) -> None:
        self.calls.append({"method": "submit", "text": text})
        self._answer(on_success, on_failure)

    def continue_dialog(
        self,
        text: str,
        prior_result: RecognitionResult,
        on_success,
        on_failure,
        force_set_parameter_name: Optional[str] = None,
    ) -> None:
        self.calls.append(
            {
                "method": "continue_dialog",
                "text": text,
                "prior_result": prior_result,
                "force_set_parameter_name": force_set_parameter_name,
            }
        )
        self._answer(on_success, on_failure)

    def _answer(self, on_success, on_failure) -> None:
        if self._hold:
            self.held.append((on_success, on_failure))
            return
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, RecognitionResult):
            on_success(outcome)
        else:
            on_failure(outcome)


def make_result(
    top_intent: str | None = "Greeting",
    entities: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> RecognitionResult:
    """Build a RecognitionResult from a LUIS-shaped document."""
    payload: dict[str, Any] = {"query": "hello", "entities": entities or []}
    if top_intent is not None:
        payload["topScoringIntent"] = {"intent": top_intent, "score": 0.9}
    payload.update(extra)
    return RecognitionResult.from_json(payload)


@pytest.fixture
def paris_result() -> RecognitionResult:
    """Result with one City entity that carries a canonical value."""
    return make_result(
        "Greeting",
        [
            {
                "entity": "Paris",
                "type": "City",
                "resolution": {"values": ["Paris, France"]},
            }
        ],
    )


@pytest.fixture
def fake_transport():
    """Provide a factory for creating fake transports.

    Example:
        def test_something(fake_transport):
            transport = fake_transport([make_result("Greeting")])
            client = LuisClient("app", "key", transport=transport)
    """

    def _create_transport(
        outcomes: list[object] | None = None,
        hold: bool = False,
    ) -> FakeTransport:
        return FakeTransport(outcomes, hold=hold)

    return _create_transport


@pytest.fixture
def luis_client(fake_transport):
    """Provide a factory for creating clients backed by a fake transport."""

    def _create_client(outcomes: list[object]) -> LuisClient:
        return LuisClient("app-id", "sub-key", transport=fake_transport(outcomes))

    return _create_client
