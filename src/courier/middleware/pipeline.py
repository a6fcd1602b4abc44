"""Sequential middleware pipeline with fail-fast halting.

Steps run one at a time, in registration order. Each step sees the
request produced by the previous one. The first ``Halt`` ends the run;
later steps never execute. Exceptions are not caught here: the
dispatcher owns the conversion of faults into responses.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from courier._internal.invoke import invoke
from courier.http.request import Request
from courier.middleware.protocol import Halt, MiddlewareStep

logger = logging.getLogger("courier.dispatch")


def step_name(step: object) -> str:
    """Human-readable name of a middleware step for logs."""
    return getattr(step, "__name__", None) or type(step).__name__


class Pipeline:
    """An immutable, ordered chain of middleware steps.

    Usage::

        pipeline = Pipeline([load_session, require_login])
        outcome = await pipeline.run(request)
        if isinstance(outcome, Halt):
            ...
    """

    __slots__ = ("_steps",)

    def __init__(self, steps: Iterable[MiddlewareStep] = ()) -> None:
        self._steps: tuple[MiddlewareStep, ...] = tuple(steps)

    @property
    def steps(self) -> tuple[MiddlewareStep, ...]:
        return self._steps

    def __len__(self) -> int:
        return len(self._steps)

    async def run(self, request: Request) -> Request | Halt:
        """Run every step against *request*.

        Returns the final request, or the first ``Halt`` produced with its
        ``request`` set to the request the halting step was given.

        Raises:
            TypeError: A step returned something other than a Request,
                a Halt, or None.
        """
        for step in self._steps:
            result = await invoke(step, request)
            if result is None:
                continue
            if isinstance(result, Halt):
                logger.debug(
                    "%s %s halted by %s: %s",
                    request.method,
                    request.path,
                    step_name(step),
                    result.reason,
                )
                return replace(result, request=request)
            if not isinstance(result, Request):
                msg = (
                    f"Middleware {step_name(step)} returned {type(result).__name__}; "
                    f"expected Request, Halt, or None."
                )
                raise TypeError(msg)
            request = result
        return request
