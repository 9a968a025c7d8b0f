"""
Time-stepping schemes for pendulum chains.
"""
from integrators.base_integrator import BaseIntegrator, IntegrationMethod
from integrators.euler import ForwardEulerIntegrator, SemiImplicitEulerIntegrator
from integrators.runge_kutta import RungeKutta4Integrator

DEFAULT_METHOD = IntegrationMethod.SEMI_IMPLICIT_EULER

_INTEGRATORS = {
    IntegrationMethod.FORWARD_EULER: ForwardEulerIntegrator,
    IntegrationMethod.SEMI_IMPLICIT_EULER: SemiImplicitEulerIntegrator,
    IntegrationMethod.RUNGE_KUTTA: RungeKutta4Integrator,
}


def create_integrator(method=None, verbose=False):
    """
    Factory function to create an integrator.

    Args:
        method: IntegrationMethod, method name/alias, or None for the
            semi-implicit Euler default
        verbose: Print which integrator was created

    Returns:
        BaseIntegrator instance
    """
    method = DEFAULT_METHOD if method is None else IntegrationMethod.from_name(method)
    integrator = _INTEGRATORS[method]()
    if verbose:
        print(f"✓ Integrator created: {integrator.name}")
    return integrator


__all__ = [
    "BaseIntegrator",
    "IntegrationMethod",
    "ForwardEulerIntegrator",
    "SemiImplicitEulerIntegrator",
    "RungeKutta4Integrator",
    "DEFAULT_METHOD",
    "create_integrator",
]
