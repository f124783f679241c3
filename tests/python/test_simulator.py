from __future__ import annotations

import math

from pytest import approx

from flowpath.sim.core.config import BoardConfig, DroneConfig, SimulationConfig
from flowpath.sim.core.grid_field import GridField
from flowpath.sim.core.rng import DeterministicRng
from flowpath.sim.core.simulator import AgentSimulator
from flowpath.sim.core.tile import cell_of


def _make(width, height, target=None, walls=(), positions=(), cap=200, seed=5, tick_interval=0.2):
    config = SimulationConfig(
        seed=seed,
        tick_interval=tick_interval,
        board=BoardConfig(width=width, height=height),
        drones=DroneConfig(population_cap=cap, initial_positions=list(positions)),
    )
    field = GridField(width, height)
    for cell in walls:
        field.set_wall(cell, True)
    field.set_target(target)
    field.recompute()
    return field, AgentSimulator(field, config, DeterministicRng(seed))


def test_default_drones_start_in_corner_cells():
    config = SimulationConfig()
    field = GridField(config.board.width, config.board.height)
    simulator = AgentSimulator(field, config)

    assert simulator.agent_positions() == [
        approx((0.3, 0.3)),
        approx((0.3, 14.3)),
        approx((19.3, 0.3)),
        approx((19.3, 14.3)),
    ]


def test_tick_waits_for_interval():
    _, simulator = _make(5, 1, target=(4, 0), positions=[(0.3, 0.3)])

    assert simulator.tick(0.15) is None
    assert simulator.agent_positions() == [approx((0.3, 0.3))]

    metrics = simulator.tick(0.15)
    assert metrics is not None
    assert metrics.tick == 1
    assert simulator.agent_positions() == [approx((1.3, 0.3))]

    # the accumulator restarts from zero after a step
    assert simulator.tick(0.1) is None


def test_step_runs_once_interval_is_reached():
    _, simulator = _make(5, 1, target=(4, 0), positions=[(0.3, 0.3)])
    assert simulator.tick(0.2) is not None
    assert simulator.tick_count == 1

    _, simulator = _make(5, 1, target=(4, 0), positions=[(0.3, 0.3)])
    assert simulator.tick(0.1999) is None
    assert simulator.tick_count == 0


def test_long_frame_runs_a_single_step():
    _, simulator = _make(6, 1, target=(5, 0), positions=[(0.3, 0.3)])

    metrics = simulator.tick(5.0)

    assert metrics.moved == 1
    assert simulator.agent_positions() == [approx((1.3, 0.3))]


def test_paused_simulator_ignores_time():
    _, simulator = _make(5, 1, target=(4, 0), positions=[(0.3, 0.3)])
    simulator.toggle_pause()

    assert simulator.tick(1.0) is None
    assert simulator.agent_positions() == [approx((0.3, 0.3))]

    simulator.toggle_pause()
    assert simulator.tick(0.25) is not None


def test_drones_follow_field_to_target():
    field, simulator = _make(5, 5, target=(2, 2), positions=[(0.3, 0.3)])

    for _ in range(4):
        simulator.step()

    assert cell_of(simulator.drones[0]) == (2, 2)
    assert simulator.drones[0].x == approx(2.3)
    assert simulator.drones[0].y == approx(2.3)


def test_population_never_exceeds_cap():
    _, simulator = _make(5, 5, target=(2, 2), positions=[(0.3, 0.3), (4.3, 4.3), (0.3, 4.3)])

    peak = 0
    for _ in range(300):
        metrics = simulator.step()
        assert metrics.population <= 200
        peak = max(peak, simulator.population)

    assert peak == 200


def test_no_spawn_when_population_at_cap():
    positions = [(2.3, 2.3)] + [(0.3, 0.3)] * 199
    _, simulator = _make(5, 5, target=(2, 2), positions=positions)
    assert simulator.population == 200

    metrics = simulator.step()

    assert metrics.spawned == 0
    assert metrics.population == 200
    assert simulator.population == 200


def test_clones_wait_until_next_tick():
    _, simulator = _make(3, 3, target=(1, 1), positions=[(1.3, 1.3)])

    first = simulator.step()
    assert first.spawned == 1
    assert simulator.population == 2
    assert simulator.agent_positions() == [approx((1.3, 1.3)), approx((1.3, 1.3))]

    second = simulator.step()
    assert second.spawned == 2
    assert simulator.population == 4


def test_jitter_stays_inside_cell_subregion():
    _, simulator = _make(5, 5, target=None, positions=[(2.3, 1.3), (0.0, 4.6)])

    for _ in range(500):
        metrics = simulator.step()
        assert metrics.jittered == 2
        first, second = simulator.drones
        assert 2.0 <= first.x <= 2.6 and 1.0 <= first.y <= 1.6
        assert 0.0 <= second.x <= 0.6 and 4.0 <= second.y < 5.0

    assert simulator.drones[0].x != approx(2.3)


def test_jitter_is_deterministic_for_seed():
    runs = []
    for _ in range(2):
        _, simulator = _make(4, 4, target=None, positions=[(1.3, 1.3), (3.1, 0.2)], seed=77)
        for _ in range(20):
            simulator.step()
        runs.append(simulator.agent_positions())
    assert runs[0] == runs[1]


def test_wall_removes_only_the_drone_on_it():
    positions = [(x + 0.3, 0.3) for x in range(5)]
    field, simulator = _make(5, 1, target=None, positions=positions)
    field.set_wall((1, 0), True)
    field.set_wall((4, 0), True)
    field.recompute()

    metrics = simulator.step()

    assert metrics.removed == 2
    assert metrics.jittered == 3
    cells = sorted(cell_of(drone) for drone in simulator.drones)
    assert cells == [(0, 0), (2, 0), (3, 0)]


def test_removal_next_to_clones_keeps_every_live_drone():
    # target drone first, then a drone on a wall, then an unvisited open drone
    positions = [(0.3, 0.3), (1.3, 0.3), (2.3, 1.3)]
    field, simulator = _make(4, 2, target=(0, 0), positions=positions)
    field.set_wall((1, 0), True)
    field.recompute()

    metrics = simulator.step()

    assert metrics.removed == 1
    assert metrics.spawned == 1
    assert metrics.moved == 1
    assert simulator.population == 3
    assert sorted(cell_of(drone) for drone in simulator.drones) == [(0, 0), (0, 0), (1, 1)]


def test_every_drone_on_walls_is_removed():
    positions = [(0.3, 0.3), (1.3, 0.3), (0.3, 1.3), (1.3, 1.3)]
    field, simulator = _make(2, 2, target=None, positions=positions)
    for cell in [(0, 0), (1, 0), (0, 1), (1, 1)]:
        field.set_wall(cell, True)
    field.recompute()

    metrics = simulator.step()

    assert metrics.removed == 4
    assert simulator.population == 0


def test_drone_outside_board_is_dropped():
    _, simulator = _make(3, 3, target=(1, 1), positions=[(0.3, 0.3)])
    simulator.add_drone((-0.5, 1.2))
    simulator.add_drone((7.0, 1.0))

    metrics = simulator.step()

    assert metrics.removed == 2
    assert simulator.population == 1


def test_agent_positions_are_copies():
    _, simulator = _make(3, 1, target=None, positions=[(0.3, 0.3)])
    positions = simulator.agent_positions()
    positions[0] = (9.0, 9.0)
    assert simulator.agent_positions() == [approx((0.3, 0.3))]


def test_reset_restores_seed_drones():
    _, simulator = _make(5, 5, target=(2, 2), positions=[(0.3, 0.3)])
    for _ in range(10):
        simulator.step()
    assert simulator.population > 1

    simulator.reset()

    assert simulator.population == 1
    assert simulator.tick_count == 0
    assert not math.isclose(simulator.drones[0].x, 2.3)


def test_rng_open_interval_samples_repeat_per_seed():
    first = DeterministicRng(7)
    samples = [first.next_open01() for _ in range(500)]
    assert all(0.0 < value < 1.0 for value in samples)

    second = DeterministicRng(7)
    assert [second.next_open01() for _ in range(500)] == samples

    first.reset()
    assert first.next_open01() == samples[0]
