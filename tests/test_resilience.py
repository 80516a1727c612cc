import pytest

from househub.services.resilience import RetryPolicy, TransientError, default_policy


def _flaky(failures: int, result="ok", exc=TransientError):
    calls = {"n": 0}

    def fn():
        calls["n"] += 1
        if calls["n"] <= failures:
            raise exc("boom")
        return result

    return fn, calls


def test_retries_transient_failures_with_linear_backoff():
    sleeps = []
    fn, calls = _flaky(2)
    policy = RetryPolicy(attempts=3, delay_seconds=0.5, sleep=sleeps.append)
    assert policy.call(fn) == "ok"
    assert calls["n"] == 3
    assert sleeps == [0.5, 1.0]


def test_gives_up_after_attempts():
    sleeps = []
    fn, calls = _flaky(5)
    policy = RetryPolicy(attempts=3, delay_seconds=1, sleep=sleeps.append)
    with pytest.raises(TransientError):
        policy.call(fn)
    assert calls["n"] == 3
    assert len(sleeps) == 2


def test_other_errors_are_not_retried():
    fn, calls = _flaky(1, exc=KeyError)
    with pytest.raises(KeyError):
        RetryPolicy(sleep=lambda s: None).call(fn)
    assert calls["n"] == 1


def test_default_policy_reads_settings_and_overrides():
    policy = default_policy(attempts=7)
    assert policy.attempts == 7
    assert policy.delay_seconds == 0
    assert policy.retry_on == (TransientError,)
