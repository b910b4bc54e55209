from __future__ import annotations

from pytest import approx

from evocells.sim.core.config import CellConfig, HazardConfig, PopulationConfig, SimulationConfig
from evocells.sim.core.world import World


def _config(**overrides) -> SimulationConfig:
    values = dict(
        seed=1234,
        world_width=200.0,
        world_height=200.0,
        cell=CellConfig(energy=30),
        hazards=HazardConfig(count=5),
        population=PopulationConfig(size=12, mutation_rate=0.05),
    )
    values.update(overrides)
    return SimulationConfig(**values)


def run_steps(config: SimulationConfig, steps: int):
    world = World(config)
    rows = []
    for tick in range(steps):
        metrics = world.step(tick)
        rows.append((metrics.generation, metrics.alive, metrics.reached_goal, metrics.dead, metrics.evolved))
    return world, rows


def test_deterministic_steps():
    world_a, result_a = run_steps(_config(), 100)
    world_b, result_b = run_steps(_config(), 100)
    assert result_a == result_b
    assert world_a.population.history == world_b.population.history


def test_metrics_report_generation_turnover():
    world, rows = run_steps(_config(), 100)
    evolved = [row for row in rows if row[4]]
    assert evolved
    for generation, alive, _, dead, _ in evolved:
        assert alive == 0
        assert dead == 12
    assert world.generation == 1 + len(evolved)
    assert all(row[1] + row[3] == 12 for row in rows)


def test_layout_defaults_and_random_hazards():
    world = World(_config())
    start = world.population.start_position
    assert (start.x, start.y) == (100.0, 195.0)
    assert (world.target.body.position.x, world.target.body.position.y) == (100.0, 25.0)
    assert len(world.hazards) == 5
    for hazard in world.hazards:
        assert 0 <= hazard.body.position.x < 200
        assert 0 <= hazard.body.position.y < 200

    other = World(_config())
    assert [tuple(h.body.position) for h in world.hazards] == [tuple(h.body.position) for h in other.hazards]


def test_explicit_hazard_positions():
    world = World(_config(hazards=HazardConfig(positions=[(10.0, 20.0), (30.0, 40.0)], radius=6.0)))
    assert [tuple(h.body.position) for h in world.hazards] == [(10.0, 20.0), (30.0, 40.0)]
    assert all(h.radius == 6.0 for h in world.hazards)


def test_reset_restores_initial_state():
    world = World(_config())
    genomes = [[tuple(g) for g in cell.genome] for cell in world.population.cells]
    for tick in range(40):
        world.step(tick)

    world.reset()

    assert world.generation == 1
    assert world.population.history == []
    assert [[tuple(g) for g in cell.genome] for cell in world.population.cells] == genomes


def test_snapshot_contains_render_payload():
    config = _config(time_step=0.5)
    world = World(config)
    world.step(0)
    snapshot = world.snapshot(1)

    assert snapshot.tick == 1
    assert snapshot.generation == 1
    assert snapshot.world.width == approx(200.0)
    assert snapshot.metadata.tick_rate == approx(2.0)
    assert snapshot.metadata.seed == 1234
    assert snapshot.metadata.population_size == 12
    assert len(snapshot.cells) == 12
    assert len(snapshot.hazards) == 5
    payload = snapshot.cells[0]
    for key in ["id", "x", "y", "radius", "color", "state", "energy"]:
        assert key in payload
    assert snapshot.target["radius"] == approx(5.0)
