"""
Transparent views returned by the ``wrap`` function.
We use wrapt so that isinstance checks, equality, repr and other magic methods
keep behaving exactly like the wrapped object.
We override __getattr__ to intercept the few attributes whose calling
convention changes, because wrapt.ObjectProxy forwards everything else as-is.
"""

from __future__ import annotations

import asyncio
import threading
import typing as t

import wrapt

from kvawait.exceptions import CommandError

if t.TYPE_CHECKING:
    from kvawait.flavors import Flavor


def _is_exception(value: t.Any) -> bool:
    return isinstance(value, BaseException) or (
        isinstance(value, type) and issubclass(value, BaseException)
    )


def awaitable_command(command: t.Callable[..., t.Any]) -> t.Callable[..., asyncio.Future[t.Any]]:
    """
    Convert a ``command(*args, callback)`` function into one returning a future.

    The completion callback is appended after the positional arguments, keyword
    arguments are forwarded untouched. The returned wrapper keeps the name,
    docstring and signature of ``command``.

    Parameters
    ----------
    command : typing.Callable[..., typing.Any]
        Function whose last positional argument is ``callback(err, result)``.

    Returns
    -------
    typing.Callable[..., asyncio.Future[typing.Any]]
        Function returning a future settled by the callback.
    """

    def call_with_future(
        wrapped: t.Callable[..., t.Any],
        instance: t.Any,
        args: tuple[t.Any, ...],
        kwargs: dict[str, t.Any],
    ) -> asyncio.Future[t.Any]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[t.Any] = loop.create_future()
        loop_thread = threading.get_ident()

        def settle(err: t.Any, result: t.Any) -> None:
            # nobody is awaiting anymore, the reply is dropped
            if future.cancelled():
                return
            if _is_exception(err):
                future.set_exception(err)
            elif err:
                future.set_exception(CommandError(reason=err))
            else:
                future.set_result(result)

        def callback(err: t.Any = None, result: t.Any = None) -> None:
            if threading.get_ident() == loop_thread:
                settle(err, result)
            else:
                loop.call_soon_threadsafe(settle, err, result)

        wrapped(*args, callback, **kwargs)
        return future

    return wrapt.FunctionWrapper(command, call_with_future)


def _wrap_result(
    method: t.Callable[..., t.Any], rewrap: t.Callable[[t.Any], t.Any]
) -> t.Callable[..., t.Any]:
    """
    Call ``method`` with the exact arguments received, then rewrap its result.
    """

    def call_then_wrap(
        wrapped: t.Callable[..., t.Any],
        instance: t.Any,
        args: tuple[t.Any, ...],
        kwargs: dict[str, t.Any],
    ) -> t.Any:
        return rewrap(wrapped(*args, **kwargs))

    return wrapt.FunctionWrapper(method, call_then_wrap)


class AwaitableProxy(wrapt.ObjectProxy):
    """
    Base view over an object of a callback-based client library.

    Being an instance of this class is the "already wrapped" marker: it can
    never collide with an attribute of the wrapped object.
    Subclasses decide per attribute name whether to convert it.
    """

    def __init__(self, wrapped: t.Any, flavor: Flavor) -> None:
        super().__init__(wrapped)
        # _self_ prefix keeps the attribute on the proxy, not the wrapped object
        self._self_flavor = flavor

    def __getattr__(self, name: str) -> t.Any:
        # Only reached for names the proxy type itself does not define
        original_attr = getattr(self.__wrapped__, name)

        if name.startswith("__"):
            return original_attr

        return self._self_intercept(name, original_attr)

    def _self_intercept(self, name: str, original_attr: t.Any) -> t.Any:
        return original_attr


class TransactionProxy(AwaitableProxy):
    """
    View over a transaction builder whose execute method returns a future.

    Queuing methods run on the real builder so commands accumulate on it.
    When they return that builder for chaining, the view is returned instead,
    so the chain ends on the converted execute method.
    """

    def _self_intercept(self, name: str, original_attr: t.Any) -> t.Any:
        if name == self._self_flavor.execute_attr:
            return awaitable_command(original_attr)
        if callable(original_attr):
            return wrapt.FunctionWrapper(original_attr, self._self_keep_chain)
        return original_attr

    def _self_keep_chain(
        self,
        wrapped: t.Callable[..., t.Any],
        instance: t.Any,
        args: tuple[t.Any, ...],
        kwargs: dict[str, t.Any],
    ) -> t.Any:
        result = wrapped(*args, **kwargs)
        if result is self.__wrapped__:
            return self
        return result


class ClientProxy(AwaitableProxy):
    """
    View over a connected client.

    Remote commands return futures, ``duplicate`` returns a wrapped client and
    the transaction accessors return wrapped builders. Event registration
    (``on``, ``once``...) is not a command and stays callback based.
    """

    def _self_intercept(self, name: str, original_attr: t.Any) -> t.Any:
        flavor = self._self_flavor

        if name == flavor.duplicate_attr:
            return _wrap_result(original_attr, lambda client: ClientProxy(client, flavor))

        if name in flavor.transaction_attrs:
            return _wrap_result(original_attr, lambda builder: TransactionProxy(builder, flavor))

        if callable(original_attr) and flavor.catalog.exists(name=name):
            return awaitable_command(original_attr)

        return original_attr


class LibraryProxy(AwaitableProxy):
    """
    View over the library object whose client factory returns wrapped clients.
    """

    def _self_intercept(self, name: str, original_attr: t.Any) -> t.Any:
        flavor = self._self_flavor
        if name == flavor.create_client_attr:
            return _wrap_result(original_attr, lambda client: ClientProxy(client, flavor))
        return original_attr
