"""
Tests for the proxies in kvawait.proxy.
"""

import asyncio
import threading

import pytest

from kvawait.exceptions import CommandError
from kvawait.proxy import (
    AwaitableProxy,
    ClientProxy,
    LibraryProxy,
    TransactionProxy,
    awaitable_command,
)
from tests.mocks import kvlib


@pytest.mark.asyncio
async def test_awaitable_command_resolves_with_result():
    """Test that the second callback argument becomes the result."""

    def fetch(key, callback):
        callback(None, key.upper())

    assert await awaitable_command(fetch)("hello") == "HELLO"


@pytest.mark.asyncio
async def test_awaitable_command_forwards_keyword_arguments():
    """Test that keyword arguments reach the command untouched."""

    def fetch(key, callback, *, encoding="utf-8"):
        callback(None, (key, encoding))

    assert await awaitable_command(fetch)("hello", encoding="latin1") == ("hello", "latin1")


@pytest.mark.asyncio
async def test_awaitable_command_rejects_with_original_error():
    """Test that the error passed to the callback is raised as-is."""
    error = ValueError("boom")

    def fail(callback):
        callback(error, None)

    with pytest.raises(ValueError) as exc_info:
        await awaitable_command(fail)()

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_awaitable_command_wraps_non_exception_errors():
    """Test that a truthy non-exception error is carried in CommandError."""

    def fail(callback):
        callback("boom", None)

    with pytest.raises(CommandError, match="boom") as exc_info:
        await awaitable_command(fail)()

    assert exc_info.value.reason == "boom"


@pytest.mark.asyncio
async def test_awaitable_command_propagates_synchronous_errors():
    """Test that exceptions raised by the call itself are not captured."""

    def broken(callback):
        raise RuntimeError("not connected")

    with pytest.raises(RuntimeError, match="not connected"):
        awaitable_command(broken)()


@pytest.mark.asyncio
async def test_awaitable_command_accepts_callback_from_another_thread():
    """Test that a reply delivered by an I/O thread settles the future."""

    def fetch(key, callback):
        threading.Thread(target=callback, args=(None, key * 2)).start()

    result = await asyncio.wait_for(awaitable_command(fetch)("ab"), timeout=5)

    assert result == "abab"


@pytest.mark.asyncio
async def test_awaitable_command_drops_reply_after_cancel():
    """Test that a reply arriving after cancellation is discarded."""
    callbacks = []

    def slow(callback):
        callbacks.append(callback)

    future = awaitable_command(slow)()
    future.cancel()
    callbacks[0](None, "late")

    assert future.cancelled()


@pytest.mark.asyncio
async def test_awaitable_command_preserves_metadata():
    """Test that the converted function keeps name and docstring."""

    def fetch(key, callback):
        """Fetch a key."""
        callback(None, key)

    converted = awaitable_command(fetch)

    assert converted.__name__ == "fetch"
    assert converted.__doc__ == "Fetch a key."
    assert converted.__wrapped__ is fetch


def test_proxies_share_the_wrapped_marker(client, kvlib_flavor):
    """Test that every view is recognizable as already wrapped."""
    for proxy in (
        LibraryProxy(kvlib, kvlib_flavor),
        ClientProxy(client, kvlib_flavor),
        TransactionProxy(client.multi(), kvlib_flavor),
    ):
        assert isinstance(proxy, AwaitableProxy)


def test_client_proxy_preserves_isinstance(client, kvlib_flavor):
    """Test that a wrapped client still looks like a client."""
    proxy = ClientProxy(client, kvlib_flavor)

    assert isinstance(proxy, kvlib.KVClient)
    assert proxy.__wrapped__ is client
    assert proxy == client


def test_client_proxy_passes_through_attributes(client, kvlib_flavor):
    """Test that non-command attributes are returned unchanged."""
    proxy = ClientProxy(client, kvlib_flavor)

    assert proxy.options is client.options
    assert proxy.connected is True
    assert proxy.on == client.on
    assert proxy.emit.__func__ is kvlib.KVClient.emit


def test_client_proxy_skips_non_callable_command_names(client, kvlib_flavor):
    """Test that a plain attribute named like a command is not converted."""
    client.type = "standalone"
    proxy = ClientProxy(client, kvlib_flavor)

    assert proxy.type == "standalone"


def test_client_proxy_raises_for_missing_attributes(client, kvlib_flavor):
    """Test that unknown attributes raise AttributeError like the original."""
    proxy = ClientProxy(client, kvlib_flavor)

    with pytest.raises(AttributeError):
        proxy.no_such_attribute


@pytest.mark.asyncio
async def test_client_proxy_does_not_mutate_original(client, kvlib_flavor):
    """Test that the original client keeps its callback convention."""
    attributes_before = dict(vars(client))
    proxy = ClientProxy(client, kvlib_flavor)
    await proxy.set("hello", "world")

    assert vars(client) == attributes_before
    assert "set" not in vars(client)

    reply: asyncio.Future = asyncio.get_running_loop().create_future()
    assert client.get("hello", lambda err, result: reply.set_result((err, result))) is True
    assert await reply == (None, "world")


@pytest.mark.asyncio
async def test_client_proxy_converts_added_commands(client, kvlib_flavor):
    """Test that commands a library learns at runtime are converted."""
    kvlib.add_command("echo", lambda _client, message: message)

    proxy = ClientProxy(client, kvlib_flavor)

    assert await proxy.echo("hi") == "hi"


@pytest.mark.asyncio
async def test_transaction_proxy_keeps_chain_on_view(client, kvlib_flavor):
    """Test that queuing calls accumulate on the real builder and return the view."""
    builder = client.multi()
    proxy = TransactionProxy(builder, kvlib_flavor)

    chained = proxy.set("hello", "world").get("hello")

    assert chained is proxy
    assert chained.__wrapped__ is builder
    assert [name for name, _, _ in builder.queue] == ["set", "get"]
    assert await chained.exec() == ["OK", "world"]


def test_transaction_proxy_passes_through_other_results(client, kvlib_flavor):
    """Test that callables not returning the builder keep their result."""
    builder = client.multi()
    builder.size = lambda: len(builder.queue)
    proxy = TransactionProxy(builder, kvlib_flavor)

    proxy.set("hello", "world")

    assert proxy.size() == 1
    assert proxy.client is client
    assert proxy.queue is builder.queue


@pytest.mark.asyncio
async def test_transaction_proxy_reports_errors_inline(client, kvlib_flavor):
    """Test that per-command errors are part of the exec result."""
    proxy = TransactionProxy(client.batch(), kvlib_flavor)

    result = await proxy.set("hello").incr("counter").exec()

    assert isinstance(result[0], kvlib.ReplyError)
    assert result[1] == 1


def test_library_proxy_passes_through_attributes(kvlib_flavor):
    """Test that library attributes other than create_client are untouched."""
    proxy = LibraryProxy(kvlib, kvlib_flavor)

    assert proxy.add_command is kvlib.add_command
    assert proxy.KVClient is kvlib.KVClient
    assert proxy.__name__ == kvlib.__name__


def test_awaitable_command_requires_running_loop(client, kvlib_flavor):
    """Test that calling outside an event loop raises before issuing the command."""
    proxy = ClientProxy(client, kvlib_flavor)

    with pytest.raises(RuntimeError):
        proxy.set("k", "v")

    assert "k" not in client.database


def test_library_proxy_does_not_mutate_original(kvlib_flavor):
    """Test that wrapping the library leaves its attributes untouched."""
    attributes_before = dict(vars(kvlib))
    proxy = LibraryProxy(kvlib, kvlib_flavor)

    proxy.create_client()

    assert vars(kvlib) == attributes_before
    assert kvlib.create_client is attributes_before["create_client"]
    assert not isinstance(kvlib.create_client(), AwaitableProxy)


@pytest.mark.asyncio
async def test_transaction_proxy_does_not_mutate_original(client, kvlib_flavor):
    """Test that the original builder keeps its callback convention."""
    builder = client.multi()
    attributes_before = dict(vars(builder))
    proxy = TransactionProxy(builder, kvlib_flavor)
    proxy.set("hello", "world")

    assert set(vars(builder)) == set(attributes_before)
    assert "exec" not in vars(builder)

    reply: asyncio.Future = asyncio.get_running_loop().create_future()
    assert builder.get("hello") is builder
    assert builder.exec(lambda err, result: reply.set_result((err, result))) is True
    assert await reply == (None, ["OK", "world"])
