"""
futurize() — bridge callback-style APIs into futures.

The registrar runs synchronously; the callback it receives may fire later,
from the loop or from any other thread.
"""

from __future__ import annotations

import asyncio
import logging
import threading

from kungfu import Ok, Error, Result

from eventual import future as F
from eventual._errors import CallbackContractError, to_exception
from eventual._rules import present
from eventual._types import Outcome, Registrar, ResultRegistrar
from eventual.lift._policy import Policy, Violation

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Completion Slot
# ═══════════════════════════════════════════════════════════════════════════════


class _Completion[T]:
    """Single-fire slot bound to the loop that created it."""

    __slots__ = ("future", "_loop", "_thread", "_policy", "_lock", "_fired")

    def __init__(self, policy: Policy) -> None:
        self._loop = asyncio.get_running_loop()
        self._thread = threading.get_ident()
        self._policy = policy
        self._lock = threading.Lock()
        self._fired = False
        self.future: asyncio.Future[T] = self._loop.create_future()

    def try_complete(self, result: Outcome[T]) -> bool:
        """Deliver the outcome unless one was delivered already."""
        with self._lock:
            if self._fired:
                return False
            self._fired = True
        if threading.get_ident() == self._thread:
            F.settle(self.future, result)
        else:
            self._loop.call_soon_threadsafe(F.settle, self.future, result)
        return True

    def complete(self, result: Outcome[T]) -> None:
        if not self.try_complete(result):
            self.violation(f"completion callback invoked again with {result!r}")

    @property
    def strict(self) -> bool:
        return self._policy.on_violation is Violation.RAISE

    def violation(self, message: str) -> None:
        match self._policy.on_violation:
            case Violation.RAISE:
                raise CallbackContractError(message)
            case Violation.WARN:
                logger.warning("Contract violation: %s", message)
            case Violation.IGNORE:
                pass


def _register[T](registrar: object, done: object, completion: _Completion[T]) -> None:
    logger.debug("Invoking registrar %r", registrar)
    try:
        registrar(done)  # type: ignore[operator]
    except Exception as exc:
        if not completion.try_complete(Error(exc)):
            logger.warning("Registrar %r raised after completing: %r", registrar, exc)


# ═══════════════════════════════════════════════════════════════════════════════
# futurize() — done(value=None, error=None)
# ═══════════════════════════════════════════════════════════════════════════════


def futurize[T](
    registrar: Registrar[T],
    *,
    policy: Policy = Policy(),
) -> asyncio.Future[T]:
    """
    Lift a callback-registering call into a future.

    The registrar receives `done(value=None, error=None)`; the future
    resolves when done fires, with the error if one is given, else with the
    value (None meaning an empty success). A registrar that raises before
    calling done fails the future with that exception.

    Must be called from a coroutine or callback of the running loop.

    Example:
        from eventual import lift as L

        def read_config(done):
            loop.call_later(1.0, lambda: done(parse(raw)))

        config = await L.futurize(read_config)
    """
    completion: _Completion[T] = _Completion(policy)

    def done(value: T | None = None, error: BaseException | None = None) -> None:
        if error is None:
            completion.complete(present(value))
            return
        if value is not None:
            message = f"callback received both {value!r} and {error!r}"
            # Resolve before raising; done() may run where nobody catches.
            if completion.strict:
                completion.try_complete(Error(CallbackContractError(message)))
            completion.violation(message)
        completion.complete(Error(error))

    _register(registrar, done, completion)
    return completion.future


# ═══════════════════════════════════════════════════════════════════════════════
# futurize_result() — done(Result)
# ═══════════════════════════════════════════════════════════════════════════════


def futurize_result[T](
    registrar: ResultRegistrar[T],
    *,
    policy: Policy = Policy(),
) -> asyncio.Future[T]:
    """
    Like futurize(), but done() receives a kungfu Result.

    An Error payload that is not an exception is wrapped in LazyFailure.
    """
    completion: _Completion[T] = _Completion(policy)

    def done(result: Result[T, BaseException]) -> None:
        match result:
            case Ok(value):
                completion.complete(present(value))
            case Error(cause):
                completion.complete(Error(to_exception(cause)))

    _register(registrar, done, completion)
    return completion.future


__all__ = ("futurize", "futurize_result")
