"""Example benchmark file.

Run with:
    microbench run examples/bench_basics.py --skip throw
"""

import asyncio

from microbench import bench


@bench
def for_increment_x1e6(timer):
    timer.start()
    for _ in range(1_000_000):
        pass
    timer.stop()


@bench
def for_decrement_x1e6(timer):
    timer.start()
    i = 1_000_000
    while i > 0:
        i -= 1
    timer.stop()


@bench
async def for_await_sleep_x10(timer):
    timer.start()
    for _ in range(10):
        await asyncio.sleep(0.001)
    timer.stop()


@bench
async def gather_sleep_x10(timer):
    timer.start()
    await asyncio.gather(*(asyncio.sleep(0.001) for _ in range(10)))
    timer.stop()


# No timer parameter: the whole call is timed, once per run
bench(
    {
        "name": "runs100_sum_range_x1e4",
        "runs": 100,
        "func": lambda: sum(range(10_000)),
    }
)


@bench
def throwing(timer):
    timer.start()
    raise RuntimeError("oops")
