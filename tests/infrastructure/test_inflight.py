"""
Tests for InflightExchange.
"""

import asyncio

import pytest

from auth_tokens.infrastructure.adapters.inflight import InflightExchange


@pytest.mark.asyncio
async def test_wait_returns_immediately_when_idle():
    exchange = InflightExchange()

    assert exchange.in_flight is False
    await asyncio.wait_for(exchange.wait(), timeout=1)


@pytest.mark.asyncio
async def test_wait_blocks_until_complete():
    exchange = InflightExchange()
    exchange.begin()

    waiter = asyncio.ensure_future(exchange.wait())
    await asyncio.sleep(0)
    assert not waiter.done()

    exchange.complete()
    await asyncio.wait_for(waiter, timeout=1)
    assert exchange.in_flight is False


@pytest.mark.asyncio
async def test_track_marks_exchange_in_flight():
    exchange = InflightExchange()

    async with exchange.track():
        assert exchange.in_flight is True

    assert exchange.in_flight is False


@pytest.mark.asyncio
async def test_track_completes_on_error():
    exchange = InflightExchange()

    with pytest.raises(ValueError):
        async with exchange.track():
            raise ValueError("sign-in failed")

    assert exchange.in_flight is False


@pytest.mark.asyncio
async def test_overlapping_exchanges_hold_waiters_until_last_completes():
    exchange = InflightExchange()
    exchange.begin()
    exchange.begin()

    exchange.complete()
    waiter = asyncio.ensure_future(exchange.wait())
    await asyncio.sleep(0)
    assert not waiter.done()
    assert exchange.in_flight is True

    exchange.complete()
    await asyncio.wait_for(waiter, timeout=1)
    assert exchange.in_flight is False


@pytest.mark.asyncio
async def test_overlapping_track_blocks():
    exchange = InflightExchange()
    first_done = asyncio.Event()
    second_release = asyncio.Event()

    async def first():
        async with exchange.track():
            await asyncio.sleep(0)
        first_done.set()

    async def second():
        async with exchange.track():
            await second_release.wait()

    tasks = [asyncio.ensure_future(first()), asyncio.ensure_future(second())]
    await asyncio.wait_for(first_done.wait(), timeout=1)

    waiter = asyncio.ensure_future(exchange.wait())
    await asyncio.sleep(0)
    assert not waiter.done()

    second_release.set()
    await asyncio.wait_for(waiter, timeout=1)
    await asyncio.gather(*tasks)


def test_complete_without_begin_is_ignored():
    exchange = InflightExchange()

    exchange.complete()
    exchange.begin()

    assert exchange.in_flight is True
