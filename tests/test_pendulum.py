"""
Unit tests for the Pendulum simulation
"""
import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from integrators import IntegrationMethod
from physics.bodies import PointMass, UniformRod
from physics.errors import UnsupportedDimensionError, ValidationError
from simulation.pendulum import Pendulum

DT = 0.005


def make_single(method=None, compound=False):
    return Pendulum(lengths=[1.0], masses=[2.0], thetas=[np.pi / 2], omegas=[0.0],
                    integration_method=method, compound=compound)


def make_double(method="runge-kutta", compound=False):
    return Pendulum(lengths=[1.0, 1.0], masses=[2.0, 1.0],
                    thetas=[np.pi / 2, np.pi / 2], omegas=[0.0, 0.0],
                    integration_method=method, compound=compound)


def energy_series(pendulum, n_steps, dt=DT):
    energies = [pendulum.total_energy()]
    for _ in range(n_steps):
        pendulum.take_step(dt)
        energies.append(pendulum.total_energy())
    return np.array(energies)


class TestConstruction:
    """Test suite for validation and derived quantities."""

    def test_defaults(self):
        pendulum = make_single()
        assert pendulum.integration_method is IntegrationMethod.SEMI_IMPLICIT_EULER
        assert pendulum.dimension == 1
        assert pendulum.time == 0.0
        assert isinstance(pendulum.body, PointMass)
        assert not pendulum.compound

    def test_compound_body(self):
        pendulum = make_double(compound=True)
        assert pendulum.compound
        assert isinstance(pendulum.body, UniformRod)

    def test_mismatched_lengths(self):
        with pytest.raises(ValidationError):
            Pendulum(lengths=[1.0, 1.0], masses=[1.0], thetas=[0.0, 0.0], omegas=[0.0, 0.0])

    def test_mismatched_state(self):
        with pytest.raises(ValidationError):
            Pendulum(lengths=[1.0], masses=[1.0], thetas=[0.0, 0.0], omegas=[0.0])

    def test_empty_chain(self):
        with pytest.raises(ValidationError):
            Pendulum(lengths=[], masses=[], thetas=[], omegas=[])

    @pytest.mark.parametrize("lengths, masses", [
        ([0.0], [1.0]),
        ([1.0], [0.0]),
        ([-1.0], [1.0]),
        ([1.0], [-2.0]),
    ])
    def test_non_positive_parameters(self, lengths, masses):
        with pytest.raises(ValidationError):
            Pendulum(lengths=lengths, masses=masses, thetas=[0.0], omegas=[0.0])

    def test_non_finite_state(self):
        with pytest.raises(ValidationError):
            Pendulum(lengths=[1.0], masses=[1.0], thetas=[np.nan], omegas=[0.0])

    def test_unknown_method(self):
        with pytest.raises(ValidationError):
            make_single(method="verlet")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            Pendulum(lengths=[1.0], masses=[1.0, 2.0], thetas=[0.0], omegas=[0.0])

    def test_three_links_construct(self):
        """Dimension is only checked when the dynamics are evaluated."""
        pendulum = Pendulum(lengths=[1.0] * 3, masses=[1.0] * 3,
                            thetas=[0.1] * 3, omegas=[0.0] * 3)
        assert pendulum.dimension == 3
        assert pendulum.joint_positions().shape == (3, 2)

    def test_radii(self):
        pendulum = make_single()
        expected = (3 * 2 / (4 * np.pi * 999.97)) ** (1 / 3)
        assert pendulum.radii[0] == pytest.approx(expected, rel=1e-12)
        assert pendulum.total_length == pytest.approx(1.0 + expected)

    def test_compound_radii(self):
        pendulum = Pendulum(lengths=[1.2], masses=[40.0], thetas=[0.0], omegas=[0.0],
                            compound=True)
        assert pendulum.radii[0] == pytest.approx(np.sqrt(40 / (np.pi * 1.2 * 999.97)),
                                                  rel=1e-12)

    def test_fixed_parameters_read_only(self):
        pendulum = make_double()
        with pytest.raises(ValueError):
            pendulum.lengths[0] = 2.0
        with pytest.raises(ValueError):
            pendulum.masses[0] = 2.0
        with pytest.raises(AttributeError):
            pendulum.compound = True
        with pytest.raises(AttributeError):
            pendulum.integration_method = IntegrationMethod.FORWARD_EULER

    def test_caller_arrays_not_shared(self):
        thetas = [0.5]
        pendulum = Pendulum(lengths=[1.0], masses=[1.0], thetas=thetas, omegas=[0.0])
        pendulum.take_step(DT)
        assert thetas == [0.5]


class TestStepping:
    """Test suite for take_step."""

    def test_closed_form_single_step(self):
        """One semi-implicit step from horizontal."""
        pendulum = make_single()
        assert pendulum.compute_alphas()[0] == pytest.approx(-9.81, rel=1e-12)

        pendulum.take_step(DT)

        assert pendulum.omegas[0] == pytest.approx(-0.04905, rel=1e-12)
        assert pendulum.thetas[0] == pytest.approx(np.pi / 2 + (-0.04905) * 0.005, rel=1e-12)
        assert pendulum.thetas[0] == pytest.approx(1.570551, abs=1e-6)
        assert pendulum.time == pytest.approx(DT)

    def test_state_updated_in_place(self):
        pendulum = make_double()
        thetas, omegas = pendulum.thetas, pendulum.omegas
        pendulum.take_step(DT)
        assert pendulum.thetas is thetas
        assert pendulum.omegas is omegas
        assert len(pendulum.thetas) == 2

    @pytest.mark.parametrize("method", list(IntegrationMethod))
    def test_zero_step_idempotent(self, method):
        pendulum = Pendulum(lengths=[1.0, 0.8], masses=[2.0, 1.0], thetas=[0.4, -1.2],
                            omegas=[0.3, 2.0], integration_method=method)
        thetas, omegas, time = pendulum.get_state()
        pendulum.take_step(0.0)
        np.testing.assert_array_equal(pendulum.thetas, thetas)
        np.testing.assert_array_equal(pendulum.omegas, omegas)
        assert pendulum.time == time == 0.0

    def test_negative_dt_rejected(self):
        pendulum = make_single()
        with pytest.raises(ValidationError):
            pendulum.take_step(-DT)
        assert pendulum.time == 0.0

    def test_time_advances_once_per_step(self):
        pendulum = make_double()
        pendulum.run(10, DT)
        assert pendulum.time == pytest.approx(10 * DT)

    def test_three_links_fail_on_step(self):
        pendulum = Pendulum(lengths=[1.0] * 3, masses=[1.0] * 3,
                            thetas=[0.1, 0.2, 0.3], omegas=[0.0] * 3)
        with pytest.raises(UnsupportedDimensionError):
            pendulum.take_step(DT)
        # A failed step leaves no trace
        np.testing.assert_array_equal(pendulum.thetas, [0.1, 0.2, 0.3])
        np.testing.assert_array_equal(pendulum.omegas, [0.0, 0.0, 0.0])
        assert pendulum.time == 0.0

    @pytest.mark.parametrize("method", list(IntegrationMethod))
    def test_determinism(self, method):
        a = make_double(method=method)
        b = make_double(method=method)
        for i in range(300):
            torque = 0.5 if i % 3 == 0 else None
            dt = DT if i % 2 == 0 else 0.003
            a.take_step(dt, torque=torque)
            b.take_step(dt, torque=torque)
            np.testing.assert_array_equal(a.thetas, b.thetas)
            np.testing.assert_array_equal(a.omegas, b.omegas)
            assert a.time == b.time

    def test_torque_forwarded_to_every_stage(self):
        seen = []
        pendulum = Pendulum(lengths=[1.0, 1.0], masses=[1.0, 1.0], thetas=[0.6, -0.3],
                            omegas=[0.0, 0.0], integration_method="runge-kutta")
        original = pendulum.compute_alphas

        def spy(thetas=None, omegas=None, torque=None):
            seen.append(torque)
            return original(thetas, omegas, torque=torque)

        pendulum.compute_alphas = spy
        pendulum.take_step(DT, torque=1.5)
        assert seen == [1.5] * 4

    def test_torque_changes_trajectory(self):
        free = Pendulum(lengths=[1.0, 1.0], masses=[1.0, 1.0], thetas=[0.6, -0.3],
                        omegas=[0.0, 0.0], integration_method="forward")
        forced = Pendulum(lengths=[1.0, 1.0], masses=[1.0, 1.0], thetas=[0.6, -0.3],
                          omegas=[0.0, 0.0], integration_method="forward")
        free.take_step(DT)
        forced.take_step(DT, torque=3.0)
        assert not np.array_equal(free.omegas, forced.omegas)

    def test_time_never_rewinds(self):
        pendulum = make_double()
        times = [pendulum.time]
        pendulum.run(20, DT, callback=lambda p: times.append(p.time))
        pendulum.take_step(0.0)
        times.append(pendulum.time)
        assert np.all(np.diff(times) >= 0.0)
        assert not hasattr(pendulum, 'reset')
        with pytest.raises(AttributeError):
            pendulum.time = 0.0
        assert pendulum.time == pytest.approx(20 * DT)

    def test_state_cannot_be_replaced(self):
        pendulum = make_single()
        with pytest.raises(AttributeError):
            pendulum.thetas = np.zeros(3)
        with pytest.raises(AttributeError):
            pendulum.omegas = np.array([0])
        pendulum.take_step(DT)
        assert pendulum.thetas.shape == (1,)
        assert pendulum.omegas.dtype == np.float64
        assert pendulum.omegas[0] != 0.0

    @pytest.mark.parametrize("dt", [None, "fast", float('nan'), float('inf')])
    def test_malformed_dt_rejected(self, dt):
        pendulum = make_single()
        with pytest.raises(ValidationError):
            pendulum.take_step(dt)
        assert pendulum.time == 0.0

    @pytest.mark.parametrize("torque", [[], float('nan'), "strong"])
    def test_malformed_torque_rejected(self, torque):
        pendulum = make_double()
        thetas, omegas, _ = pendulum.get_state()
        with pytest.raises(ValidationError):
            pendulum.take_step(DT, torque=torque)
        np.testing.assert_array_equal(pendulum.thetas, thetas)
        np.testing.assert_array_equal(pendulum.omegas, omegas)
        assert pendulum.time == 0.0

    def test_run_callback(self):
        pendulum = make_single()
        times = []
        pendulum.run(5, DT, callback=lambda p: times.append(p.time))
        np.testing.assert_allclose(times, DT * np.arange(1, 6))


class TestEnergyBehaviour:
    """Energy over 10 s of a single pendulum released from horizontal."""

    N_STEPS = 2000
    # m·g·ℓ of the single pendulum: the natural energy scale
    ENERGY_SCALE = 2.0 * 9.81 * 1.0

    def test_semi_implicit_bounded(self):
        energies = energy_series(make_single("semi"), self.N_STEPS)
        drift = np.abs(energies - energies[0])
        assert np.max(drift) <= 0.01 * self.ENERGY_SCALE

    def test_forward_euler_drifts_upward(self):
        energies = energy_series(make_single("forward"), self.N_STEPS)
        semi = energy_series(make_single("semi"), self.N_STEPS)
        semi_bound = np.max(np.abs(semi - semi[0]))

        assert np.all(np.diff(energies) > 0)
        assert energies[-1] - energies[0] > semi_bound
        assert energies[-1] - energies[0] > 0.01 * self.ENERGY_SCALE

    def test_runge_kutta_negligible_drift(self):
        energies = energy_series(make_single("runge-kutta"), self.N_STEPS)
        assert np.max(np.abs(energies - energies[0])) <= 1e-4 * self.ENERGY_SCALE

    def test_double_point_mass_conserved_rk4(self):
        pendulum = make_double("runge-kutta")
        energies = energy_series(pendulum, 1000, dt=0.001)
        assert np.max(np.abs(energies - energies[0])) < 1e-3 * (3.0 * 9.81 * 2.0)

    def test_double_compound_conserved_rk4(self):
        pendulum = Pendulum(lengths=[1.2, 0.8], masses=[40.0, 20.0], thetas=[2.0, 1.0],
                            omegas=[0.0, 0.0], integration_method="runge-kutta",
                            compound=True)
        energies = energy_series(pendulum, 1000, dt=0.001)
        assert np.max(np.abs(energies - energies[0])) < 1e-4 * (60.0 * 9.81 * 2.0)


class TestQueries:
    """Test suite for derived geometry and energy queries."""

    def test_joint_positions_follow_state(self):
        pendulum = make_double()
        np.testing.assert_allclose(pendulum.joint_positions(), [[1.0, 0.0], [2.0, 0.0]],
                                   atol=1e-12)

    def test_compound_centers_of_mass(self):
        pendulum = make_double(compound=True)
        np.testing.assert_allclose(pendulum.centers_of_mass(), [[0.5, 0.0], [1.5, 0.0]],
                                   atol=1e-12)

    def test_energy_breakdown_order(self):
        labels = [name for name, _ in make_double(compound=True).energy_breakdown()]
        assert labels == ['Kinetic 1', 'Kinetic 2', 'Potential 1', 'Potential 2',
                          'Rotational 1', 'Rotational 2', 'Total energy']

    def test_total_energy_matches_breakdown(self):
        pendulum = make_double()
        pendulum.run(50, DT)
        breakdown = pendulum.energy_breakdown()
        assert pendulum.total_energy() == pytest.approx(sum(v for _, v in breakdown[:-1]))

    def test_get_state_is_copy(self):
        pendulum = make_single()
        thetas, omegas, time = pendulum.get_state()
        thetas[0] = 99.0
        assert pendulum.thetas[0] == pytest.approx(np.pi / 2)

    def test_get_info(self):
        info = make_double().get_info()
        assert info["dimension"] == 2
        assert info["body"] == "point-mass"
        assert info["integration_method"] == "Runge-Kutta"
        assert "total_energy" in info


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
