"""Debouncer timing tests (short real delays)."""

import asyncio

import pytest

from polis_client.utils.debounce import Debouncer

DELAY = 0.05


class Recorder:
    def __init__(self):
        self.values: list[str] = []

    async def __call__(self, value: str) -> None:
        self.values.append(value)


@pytest.mark.unit
@pytest.mark.asyncio
class TestDebouncer:
    async def test_fires_after_quiescence_with_latest_value(self):
        recorder = Recorder()
        debouncer = Debouncer(recorder, delay=DELAY)

        for text in ["p", "ph", "phys", "physics"]:
            debouncer.push(text)
            await asyncio.sleep(DELAY / 5)
        assert recorder.values == []

        await debouncer.wait()
        assert recorder.values == ["physics"]

    async def test_unchanged_value_is_not_repeated(self):
        recorder = Recorder()
        debouncer = Debouncer(recorder, delay=DELAY)

        debouncer.push("anna")
        await debouncer.wait()
        debouncer.push("ann")
        debouncer.push("anna")
        await debouncer.wait()

        assert recorder.values == ["anna"]

    async def test_submit_is_immediate(self):
        recorder = Recorder()
        debouncer = Debouncer(recorder, delay=10)

        debouncer.push("draft")
        await debouncer.submit("final")

        assert recorder.values == ["final"]
        assert not debouncer.pending

    async def test_submit_repeats_same_value(self):
        recorder = Recorder()
        debouncer = Debouncer(recorder, delay=DELAY)

        await debouncer.submit("x")
        await debouncer.submit("x")
        assert recorder.values == ["x", "x"]

    async def test_close_cancels_pending(self):
        recorder = Recorder()
        debouncer = Debouncer(recorder, delay=DELAY)

        debouncer.push("late")
        assert debouncer.pending
        debouncer.close()
        await asyncio.sleep(DELAY * 2)

        debouncer.push("after close")
        await debouncer.submit("after close")
        assert recorder.values == []

    async def test_wait_without_pending(self):
        await Debouncer(Recorder(), delay=DELAY).wait()

    async def test_new_input_does_not_cancel_running_delivery(self):
        release = asyncio.Event()
        started: list[str] = []
        finished: list[str] = []

        async def slow_search(value: str) -> None:
            started.append(value)
            await release.wait()
            finished.append(value)

        debouncer = Debouncer(slow_search, delay=DELAY)
        debouncer.push("ab")
        await asyncio.sleep(DELAY * 3)
        assert started == ["ab"]
        assert not debouncer.pending

        debouncer.push("a")
        assert debouncer.pending
        release.set()
        await debouncer.wait()

        assert finished == ["ab", "a"]

    async def test_failed_delivery_is_not_remembered(self):
        calls: list[str] = []

        async def flaky(value: str) -> None:
            calls.append(value)
            if len(calls) == 1:
                raise RuntimeError("boom")

        debouncer = Debouncer(flaky, delay=DELAY)
        debouncer.push("a")
        with pytest.raises(RuntimeError):
            await debouncer.wait()

        debouncer.push("a")
        await debouncer.wait()
        assert calls == ["a", "a"]


@pytest.mark.unit
def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        Debouncer(Recorder(), delay=-1)
