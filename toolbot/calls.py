"""Result wrapper for platform calls with a per-step failure policy."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable


class Policy(str, Enum):
    IGNORE = "ignore"  # drop the error silently
    LOG = "log"  # log and continue
    ABORT = "abort"  # log and end the current flow


@dataclass
class CallResult:
    step: str
    ok: bool
    value: Any = None
    error: Exception | None = None


class StepAborted(Exception):
    """A platform call under the ABORT policy failed."""

    def __init__(self, step: str, error: Exception):
        super().__init__(f"{step} failed: {error}")
        self.step = step
        self.error = error


async def attempt(step: str, call: Awaitable, policy: Policy) -> CallResult:
    """Await a platform call and apply the failure policy.

    Returns a CallResult for IGNORE/LOG failures so the caller can branch
    on `ok`. Raises StepAborted for ABORT failures.
    """
    try:
        return CallResult(step=step, ok=True, value=await call)
    except Exception as e:
        if policy is Policy.IGNORE:
            return CallResult(step=step, ok=False, error=e)
        print(f"⚠️ [{step}] {type(e).__name__}: {e}", flush=True)
        if policy is Policy.ABORT:
            raise StepAborted(step, e) from e
        return CallResult(step=step, ok=False, error=e)
