from dataclasses import dataclass

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config.settings import Settings
from app.logging.logger import Log


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff for transient failures of best-effort calls."""

    max_attempts: int = 3
    wait_multiplier_seconds: float = 1.0
    wait_max_seconds: float = 8.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retry_max_attempts,
            wait_multiplier_seconds=settings.retry_wait_multiplier_seconds,
            wait_max_seconds=settings.retry_wait_max_seconds,
        )


def retrying(policy: RetryPolicy, retry_on: tuple[type[Exception], ...]) -> Retrying:
    """Build a Retrying controller that re-raises the last error once attempts run out.

    Usage:
        text = retrying(policy, (StorageNetworkError,))(store.export_text, object_id)
    """
    return Retrying(
        stop=stop_after_attempt(max(1, policy.max_attempts)),
        wait=wait_exponential(
            multiplier=policy.wait_multiplier_seconds,
            max=policy.wait_max_seconds,
        ),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_retry,
        reraise=True,
    )


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    Log.warning(f"Attempt {retry_state.attempt_number} failed, retrying: {exc}")
