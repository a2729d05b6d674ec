import asyncio

import pytest

from mumu_probe.core.engine import run_search
from mumu_probe.core.session import SearchSession
from mumu_probe.models.probe import ProbeResult
from mumu_probe.models.stats import SearchStats
from tests.fakes import FakeProber, numbered


@pytest.mark.parametrize("ceiling", [1, 3, 50])
def test_never_exceeds_concurrency_ceiling(ceiling: int) -> None:
    prober = FakeProber()
    session = SearchSession()

    stats = asyncio.run(
        run_search(numbered(200), prober.probe, session, concurrency=ceiling)
    )

    assert prober.peak <= ceiling
    assert stats.peak_in_flight == min(ceiling, 200)
    assert stats.dispatched == 200
    assert stats.failed == 200
    assert stats.in_flight == 0
    assert session.found is False


def test_delivers_at_most_one_url_when_everything_succeeds() -> None:
    candidates = numbered(30)
    prober = FakeProber(winners=candidates)
    successes: list[ProbeResult] = []

    async def scenario() -> tuple[str, bool]:
        session = SearchSession()
        await run_search(
            candidates,
            prober.probe,
            session,
            concurrency=10,
            on_result=lambda r: successes.append(r) if r.is_success else None,
        )
        url = await session.wait_result()
        try:
            await asyncio.wait_for(session.wait_result(), timeout=0.05)
        except asyncio.TimeoutError:
            return url, False
        return url, True

    url, second_delivery = asyncio.run(scenario())
    assert len(successes) > 1
    assert url in {prober.url_for(c) for c in candidates}
    assert second_delivery is False


def test_stops_dispatching_once_found() -> None:
    prober = FakeProber(winners={"000005"})
    session = SearchSession()

    stats = asyncio.run(
        run_search(numbered(100), prober.probe, session, concurrency=1)
    )

    assert prober.calls == numbered(6)
    assert stats.dispatched == 6
    assert stats.skipped == 94
    assert stats.succeeded == 1
    assert session.found is True


def test_cancelled_session_dispatches_nothing() -> None:
    prober = FakeProber()
    session = SearchSession()
    session.cancel()

    stats = asyncio.run(run_search(numbered(10), prober.probe, session))

    assert prober.calls == []
    assert stats.skipped == 10


def test_cancelling_the_fan_out_cancels_in_flight_probes() -> None:
    prober = FakeProber(delay=60.0)
    stats = SearchStats()

    async def scenario() -> None:
        session = SearchSession()
        task = asyncio.create_task(
            run_search(numbered(100), prober.probe, session, concurrency=5, stats=stats)
        )
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())

    assert prober.cancelled == 5
    assert stats.dispatched == 5
    assert stats.in_flight == 0


def test_rejects_non_positive_concurrency() -> None:
    prober = FakeProber()
    with pytest.raises(ValueError):
        asyncio.run(run_search(numbered(1), prober.probe, SearchSession(), concurrency=0))


def test_reader_draining_the_slot_still_sees_one_url() -> None:
    candidates = numbered(5)
    prober = FakeProber(winners=candidates)
    delays = {c: 0.01 * (i + 1) for i, c in enumerate(candidates)}

    async def staggered(candidate: str) -> ProbeResult:
        await asyncio.sleep(delays[candidate])
        return await prober.probe(candidate)

    async def scenario() -> list[str]:
        session = SearchSession()
        delivered: list[str] = []

        async def reader() -> None:
            while True:
                delivered.append(await session.wait_result())

        reader_task = asyncio.create_task(reader())
        await run_search(candidates, staggered, session, concurrency=5)
        await asyncio.sleep(0.05)
        reader_task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await reader_task
        return delivered

    delivered = asyncio.run(scenario())
    assert delivered == [prober.url_for("000000")]
