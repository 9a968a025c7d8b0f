"""
First-order Euler integrators.

Both evaluate the accelerations once per step at the current state. They only
differ in which angular velocity advances the angle:
- Forward Euler uses the OLD omega (explicit, energy drifts upward)
- Semi-implicit Euler uses the NEW omega (symplectic, energy stays bounded)
"""
from integrators.base_integrator import BaseIntegrator, IntegrationMethod


class ForwardEulerIntegrator(BaseIntegrator):
    """Explicit Euler: θ += ω·dt, then ω += α·dt."""

    method = IntegrationMethod.FORWARD_EULER

    def _advance(self, thetas, omegas, dt, derivative):
        alphas = derivative(thetas, omegas)
        new_thetas = thetas + omegas * dt
        new_omegas = omegas + alphas * dt
        return new_thetas, new_omegas


class SemiImplicitEulerIntegrator(BaseIntegrator):
    """Symplectic Euler: ω += α·dt, then θ += ω_new·dt."""

    method = IntegrationMethod.SEMI_IMPLICIT_EULER

    def _advance(self, thetas, omegas, dt, derivative):
        alphas = derivative(thetas, omegas)
        new_omegas = omegas + alphas * dt
        new_thetas = thetas + new_omegas * dt
        return new_thetas, new_omegas

    def is_symplectic(self):
        return True
