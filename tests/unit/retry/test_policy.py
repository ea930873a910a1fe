"""
Unit tests for RetryPolicy.

The adapter is mocked so each test scripts attempt outcomes directly;
backoff sleeps go through a recording fake.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from culturesense_llm.llm.exceptions import (
    AuthError,
    EmptyCompletionError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    TransientProviderError,
)
from culturesense_llm.llm.provider_adapter import ProviderAdapter
from culturesense_llm.models.enums import AttemptOutcome, ProviderName
from culturesense_llm.retry.exceptions import ProviderExhaustedError
from culturesense_llm.retry.metadata import AttemptRecord
from culturesense_llm.retry.policy import RetryPolicy, plan_attempts


def make_adapter(config, outcomes) -> MagicMock:
    """Mock adapter whose successive calls yield ``outcomes`` (text or exception)."""
    adapter = MagicMock(spec=ProviderAdapter)
    adapter.config = config
    adapter.call = AsyncMock(side_effect=outcomes)
    return adapter


def called_models(adapter: MagicMock) -> list[str]:
    return [call.args[0] for call in adapter.call.await_args_list]


class TestPlanAttempts:
    """Tests for the attempt plan."""

    def test_plan_order_and_linear_backoff(self, together_config):
        plan = plan_attempts(together_config)

        assert [step.state for step in plan] == ["primary", "fallback", "backoff", "backoff"]
        assert [step.model for step in plan] == ["tg-primary", "tg-fallback", "tg-fallback", "tg-fallback"]
        assert [step.delay for step in plan] == [0.0, 0.0, 2.0, 4.0]

    def test_plan_length_matches_max_attempts(self, together_config):
        config = together_config.model_copy(update={"max_retries_per_model": 5})

        assert len(plan_attempts(config)) == config.max_attempts == 7

    def test_zero_retries_still_tries_fallback(self, together_config):
        config = together_config.model_copy(update={"max_retries_per_model": 0})

        assert [step.model for step in plan_attempts(config)] == ["tg-primary", "tg-fallback"]


class TestRetryPolicy:
    """Tests for RetryPolicy.run."""

    @pytest.mark.asyncio
    async def test_primary_success_makes_one_call(self, openrouter_config, messages, fake_sleep):
        adapter = make_adapter(openrouter_config, ["Here are three albums."])
        policy = RetryPolicy(adapter, sleep=fake_sleep)

        outcome = await policy.run(messages)

        assert outcome.raw_text == "Here are three albums."
        assert outcome.provider is ProviderName.OPENROUTER
        assert outcome.model == "or-primary"
        assert outcome.attempt_count == 1
        assert outcome.attempts[0].outcome is AttemptOutcome.SUCCESS
        assert adapter.call.await_count == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_primary_timeout_then_fallback_success(self, openrouter_config, messages, fake_sleep):
        adapter = make_adapter(
            openrouter_config,
            [ProviderTimeoutError("Request timeout after 5.0s"), "fallback answer"],
        )
        policy = RetryPolicy(adapter, sleep=fake_sleep)

        outcome = await policy.run(messages)

        assert outcome.raw_text == "fallback answer"
        assert outcome.model == "or-fallback"
        assert [a.outcome for a in outcome.attempts] == [
            AttemptOutcome.TRANSIENT_ERROR,
            AttemptOutcome.SUCCESS,
        ]
        assert outcome.attempts[0].error_detail == "Request timeout after 5.0s"
        assert [a.attempt_index for a in outcome.attempts] == [1, 2]
        # No backoff before the fallback
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_success_after_backoff(self, together_config, messages, fake_sleep):
        adapter = make_adapter(
            together_config,
            [
                TransientProviderError("together API error: 503", status_code=503),
                ProviderRateLimitError("together rate limited the request", status_code=429),
                "third time lucky",
            ],
        )
        policy = RetryPolicy(adapter, sleep=fake_sleep)

        outcome = await policy.run(messages)

        assert outcome.model == "tg-fallback"
        assert outcome.attempt_count == 3
        assert outcome.attempts[1].status_code == 429
        assert fake_sleep.delays == [2.0]

    @pytest.mark.asyncio
    async def test_auth_error_on_primary_stops_immediately(self, openrouter_config, messages, fake_sleep):
        adapter = make_adapter(
            openrouter_config,
            [AuthError("openrouter rejected credentials: 401", status_code=401)],
        )
        policy = RetryPolicy(adapter, sleep=fake_sleep)

        with pytest.raises(ProviderExhaustedError) as exc_info:
            await policy.run(messages)

        error = exc_info.value
        assert error.provider is ProviderName.OPENROUTER
        assert error.attempt_count == 1
        assert error.attempts[0].outcome is AttemptOutcome.FATAL_ERROR
        assert error.attempts[0].status_code == 401
        assert adapter.call.await_count == 1
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_auth_error_during_backoff_stops_immediately(self, together_config, messages, fake_sleep):
        adapter = make_adapter(
            together_config,
            [
                TransientProviderError("together API error: 500", status_code=500),
                TransientProviderError("together API error: 500", status_code=500),
                AuthError("together rejected credentials: 403", status_code=403),
                "never reached",
            ],
        )
        policy = RetryPolicy(adapter, sleep=fake_sleep)

        with pytest.raises(ProviderExhaustedError) as exc_info:
            await policy.run(messages)

        assert exc_info.value.attempt_count == 3
        assert exc_info.value.last_error == "together rejected credentials: 403"
        assert fake_sleep.delays == [2.0]

    @pytest.mark.asyncio
    async def test_exhaustion_makes_bounded_attempts(self, together_config, messages, fake_sleep):
        """Test primary, fallback and N backoff retries, then exhaustion."""
        failures = [
            EmptyCompletionError("Empty response from together API"),
            TransientProviderError("together API error: 502", status_code=502),
            ProviderTimeoutError("Request timeout after 5.0s"),
            TransientProviderError("together API error: 503", status_code=503),
        ]
        adapter = make_adapter(together_config, failures)
        policy = RetryPolicy(adapter, sleep=fake_sleep)

        with pytest.raises(ProviderExhaustedError) as exc_info:
            await policy.run(messages)

        error = exc_info.value
        assert error.attempt_count == 2 + together_config.max_retries_per_model
        assert called_models(adapter) == ["tg-primary", "tg-fallback", "tg-fallback", "tg-fallback"]
        assert fake_sleep.delays == [2.0, 4.0]
        assert all(a.outcome is AttemptOutcome.TRANSIENT_ERROR for a in error.attempts)
        assert error.last_error == "together API error: 503"
        assert "exhausted after 4 attempts" in str(error)

    @pytest.mark.asyncio
    async def test_per_attempt_timeout_passed_to_adapter(self, together_config, messages, fake_sleep):
        adapter = make_adapter(together_config, ["ok"])

        await RetryPolicy(adapter, sleep=fake_sleep).run(messages)

        assert adapter.call.await_args.args[2] == together_config.per_attempt_timeout

    @pytest.mark.asyncio
    async def test_latency_measured_with_injected_clock(self, together_config, messages, fake_sleep):
        ticks = iter([10.0, 10.25])
        adapter = make_adapter(together_config, ["ok"])
        policy = RetryPolicy(adapter, sleep=fake_sleep, clock=lambda: next(ticks))

        outcome = await policy.run(messages)

        assert outcome.attempts[0].latency_ms == 250


class TestAttemptRecord:
    """Tests for AttemptRecord invariants."""

    def test_rejects_zero_attempt_index(self):
        with pytest.raises(ValueError):
            AttemptRecord(
                provider=ProviderName.TOGETHER,
                model="m",
                attempt_index=0,
                outcome=AttemptOutcome.SUCCESS,
                latency_ms=1,
            )

    def test_to_dict_uses_plain_values(self):
        record = AttemptRecord(
            provider=ProviderName.TOGETHER,
            model="m",
            attempt_index=2,
            outcome=AttemptOutcome.TRANSIENT_ERROR,
            latency_ms=12,
            error_detail="boom",
            status_code=500,
        )

        assert record.to_dict() == {
            "provider": "together",
            "model": "m",
            "attempt_index": 2,
            "outcome": "transient_error",
            "latency_ms": 12,
            "error_detail": "boom",
            "status_code": 500,
        }
        assert not record.succeeded
