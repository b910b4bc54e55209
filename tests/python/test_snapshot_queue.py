import asyncio
import json

from evocells.app.server import SimulationController
from evocells.sim.core.config import CellConfig, PopulationConfig, SimulationConfig


def _controller() -> SimulationController:
    config = SimulationConfig(cell=CellConfig(energy=10), population=PopulationConfig(size=4))
    return SimulationController(config)


def test_snapshot_queue_ack_cleanup() -> None:
    controller = _controller()

    async def exercise() -> None:
        controller.tick = 1
        await controller._broadcast_snapshot()
        controller.tick = 2
        await controller._broadcast_snapshot()
        async with controller._queue_lock:
            queued_ticks = [item.tick for item in controller._snapshot_queue]
        assert queued_ticks == [1, 2]
        await controller.acknowledge(1)
        async with controller._queue_lock:
            remaining_ticks = [item.tick for item in controller._snapshot_queue]
        assert remaining_ticks == [2]

    asyncio.run(exercise())


def test_step_advances_and_serializes_generation() -> None:
    controller = _controller()

    async def exercise() -> None:
        for _ in range(12):
            await controller.step()
        assert controller.tick == 12
        assert controller.world.generation >= 2
        async with controller._queue_lock:
            last = controller._snapshot_queue[-1]
        message = json.loads(last.payload)
        assert message["type"] == "snapshot"
        assert message["payload"]["generation"] == controller.world.generation
        assert len(message["payload"]["cells"]) == 4
        await controller.reset()
        assert controller.tick == 0
        assert controller.world.generation == 1

    asyncio.run(exercise())


def test_step_halts_on_vector_fault() -> None:
    controller = _controller()
    controller.running = True
    cell = controller.world.population.cells[0]
    cell.velocity = -cell.genome[cell.energy]

    asyncio.run(controller.step())

    assert controller.running is False
    assert controller.tick == 0


def test_queue_is_bounded_without_clients() -> None:
    config = SimulationConfig(cell=CellConfig(energy=10), population=PopulationConfig(size=4))
    controller = SimulationController(config, queue_limit=16)

    async def exercise() -> None:
        for _ in range(50):
            await controller.step()
        async with controller._queue_lock:
            queued_ticks = [item.tick for item in controller._snapshot_queue]
        assert len(queued_ticks) == 16
        assert queued_ticks == list(range(35, 51))

    asyncio.run(exercise())
