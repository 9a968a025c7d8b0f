"""
Classical fourth-order Runge-Kutta integrator.

Integrates the combined state (θ, ω) of every link. The torque of a step is
held constant across all four stages (it lives in the derivative closure).
"""
from integrators.base_integrator import BaseIntegrator, IntegrationMethod


class RungeKutta4Integrator(BaseIntegrator):
    """
    RK4 over (θ, ω).

    Stage k evaluates the accelerations at a perturbed state and keeps the
    angular velocity used to build that state, so the final update is
        θ += dt/6 · (ω_k1 + 2ω_k2 + 2ω_k3 + ω_k4)
        ω += dt/6 · (α_k1 + 2α_k2 + 2α_k3 + α_k4)
    """

    method = IntegrationMethod.RUNGE_KUTTA

    def _advance(self, thetas, omegas, dt, derivative):
        half = dt / 2.0

        omegas_k1 = omegas
        alphas_k1 = derivative(thetas, omegas)

        omegas_k2 = omegas + half * alphas_k1
        alphas_k2 = derivative(thetas + half * omegas_k1, omegas_k2)

        omegas_k3 = omegas + half * alphas_k2
        alphas_k3 = derivative(thetas + half * omegas_k2, omegas_k3)

        omegas_k4 = omegas + dt * alphas_k3
        alphas_k4 = derivative(thetas + dt * omegas_k3, omegas_k4)

        theta_step = omegas_k1 + 2.0 * omegas_k2 + 2.0 * omegas_k3 + omegas_k4
        omega_step = alphas_k1 + 2.0 * alphas_k2 + 2.0 * alphas_k3 + alphas_k4

        new_thetas = thetas + (dt / 6.0) * theta_step
        new_omegas = omegas + (dt / 6.0) * omega_step
        return new_thetas, new_omegas

    @property
    def evaluations_per_step(self):
        return 4
