"""Route failures of support-object coroutines to the recorder."""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from typing import Any, Awaitable, Callable

from scenarist.recorder import Recorder

logger = logging.getLogger(__name__)

_GUARD_MARKER = "__scenarist_async_guard__"
_RECORDER_ATTRIBUTE = "__scenarist_recorder__"


def guard_coroutine(method: Callable[..., Awaitable[Any]], recorder: Recorder) -> Callable[..., Awaitable[Any]]:
    """Wrap ``method`` so its failure lands in a recorder instead of the awaiter.

    The wrapper resolves to the method's result on success and to ``None``
    when the method raised. The recorder is looked up on every call, so
    ``retarget`` can hand an already guarded method to another container.
    """

    @functools.wraps(method)
    async def guarded(*args: Any, **kwargs: Any) -> Any:
        try:
            return await method(*args, **kwargs)
        except Exception as error:
            getattr(guarded, _RECORDER_ATTRIBUTE).save_first_async_error(error)
            return None

    setattr(guarded, _GUARD_MARKER, True)
    setattr(guarded, _RECORDER_ATTRIBUTE, recorder)
    return guarded


def is_guarded(method: Any) -> bool:
    return getattr(method, _GUARD_MARKER, False) is True


def retarget(method: Any, recorder: Recorder) -> None:
    """Send future failures of a guarded ``method`` to ``recorder``."""

    setattr(method, _RECORDER_ATTRIBUTE, recorder)


def recorder_of(method: Any) -> Recorder | None:
    return getattr(method, _RECORDER_ATTRIBUTE, None)


def _coroutine_member(obj: Any, name: str) -> Any:
    """Return the bound coroutine called ``name``, or ``None`` for anything else.

    Members are inspected statically so properties and other descriptors are
    never evaluated.
    """

    try:
        static = inspect.getattr_static(obj, name)
    except AttributeError:
        return None

    if isinstance(static, (staticmethod, classmethod)):
        function = static.__func__
    elif inspect.isfunction(static) or inspect.ismethod(static):
        function = static
    else:
        return None

    if not (inspect.iscoroutinefunction(function) or is_guarded(function)):
        return None
    return getattr(obj, name)


def guard_async_methods(obj: Any, recorder: Recorder) -> list[str]:
    """Replace every public coroutine method of ``obj`` with a guarded one.

    The bound method is stored on the instance, so the receiver stays the
    same. Methods guarded earlier are pointed at ``recorder`` instead of
    being wrapped twice. Returns the names of the guarded methods; raises
    ``AttributeError`` when a coroutine cannot be replaced.
    """

    guarded: list[str] = []
    for name in dir(obj):
        if name.startswith("_"):
            continue
        member = _coroutine_member(obj, name)
        if member is None:
            continue
        if is_guarded(member):
            retarget(member, recorder)
            logger.debug("Coroutine %s.%s now reports to another recorder", type(obj).__name__, name)
        else:
            try:
                setattr(obj, name, guard_coroutine(member, recorder))
            except (AttributeError, TypeError) as error:
                raise AttributeError(
                    f"coroutine {type(obj).__name__}.{name} cannot be replaced: {error}"
                ) from error
        guarded.append(name)
    return guarded


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def run_hook(hook: Callable[[], Any]) -> Any:
    """Call an initialization hook and wait for it when it returns an awaitable.

    The container is built outside of any event loop, so a fresh loop drives
    asynchronous hooks to completion.
    """

    result = hook()
    if inspect.isawaitable(result):
        return asyncio.run(_await(result))
    return result


__all__ = [
    "guard_async_methods",
    "guard_coroutine",
    "is_guarded",
    "recorder_of",
    "retarget",
    "run_hook",
]
