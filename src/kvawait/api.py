"""
Main endpoint for users.
Exposes a `wrap` function that maps a callback-based library, client or
transaction builder to an equivalent view whose remote commands return
awaitable futures.
"""

from __future__ import annotations

import typing as t

import structlog

from kvawait.exceptions import WrapTargetTypeError
from kvawait.flavors import Flavor, find_flavor, get_flavors
from kvawait.proxy import AwaitableProxy, ClientProxy, LibraryProxy, TransactionProxy

log = structlog.get_logger(__name__)

# Type variable for the wrapped object type
T = t.TypeVar(name="T")

_PROXY_BY_KIND: dict[str, type[AwaitableProxy]] = {
    "library": LibraryProxy,
    "client": ClientProxy,
    "transaction": TransactionProxy,
}


def is_wrapped(target: t.Any) -> bool:
    """
    Tell whether an object was already returned by ``wrap``.

    Parameters
    ----------
    target : typing.Any
        Object to inspect.

    Returns
    -------
    bool
        ``True`` for views produced by this package.
    """
    return isinstance(target, AwaitableProxy)


def _expected_type(flavors: t.Sequence[Flavor]) -> str:
    if not flavors:
        return "client"
    return " | ".join(flavor.client_type.__name__ for flavor in flavors)


def wrap(target: T, flavor: Flavor | None = None) -> T:
    """
    Universal adapter.

    Parameters
    ----------
    target : T
        Library object, connected client or transaction builder of a
        callback-based client library.
    flavor : Flavor | None, optional
        Library description to match against. When omitted, every registered
        flavor is tried in registration order.

    Returns
    -------
    T
        Transparent view of ``target``, or ``target`` itself when it is
        already wrapped.

    Raises
    ------
    WrapTargetTypeError
        If ``target`` is ``None`` or belongs to no known flavor.

    Notes
    -----
    The original object is never modified and keeps its callback convention:

    >>> from kvawait import wrap
    >>> client = wrap(kvlib.create_client())
    >>> await client.set("hello", "world")
    'OK'
    """
    flavors = (flavor,) if flavor is not None else get_flavors()

    # 1. Nothing to wrap
    if target is None:
        log.debug(event="Rejected wrap target", target_type=type(target).__name__)
        raise WrapTargetTypeError("client", _expected_type(flavors=flavors), target)

    # 2. Idempotence: a view is returned as-is, never wrapped twice
    if is_wrapped(target=target):
        return target

    # 3. Library, client, then transaction builder
    candidate = flavor if flavor is not None else find_flavor(target=target)
    kind = candidate.kind_of(target=target) if candidate is not None else None
    if candidate is None or kind is None:
        log.debug(event="Rejected wrap target", target_type=type(target).__name__)
        raise WrapTargetTypeError("client", _expected_type(flavors=flavors), target)

    log.debug(
        event="Wrapped target",
        kind=kind,
        flavor=candidate.name,
        target_type=type(target).__name__,
    )
    return t.cast(T, _PROXY_BY_KIND[kind](target, candidate))
