from types import SimpleNamespace

import numpy as np
import pytest

import lattice_layout.optimize as optimize
from lattice_layout import MinimizeOptions, minimize


def _quadratic(x: np.ndarray) -> float:
    return float((x[0] - 1.0) ** 2 + (x[1] + 2.0) ** 2)


def _quadratic_partial(index: int, x: np.ndarray) -> float:
    target = (1.0, -2.0)
    return 2.0 * (float(x[index]) - target[index])


def test_minimize_quadratic_with_nelder_mead():
    result = minimize(_quadratic, [0.0, 0.0])

    assert result.success
    assert result.x == pytest.approx([1.0, -2.0], abs=1e-3)
    assert result.value == pytest.approx(0.0, abs=1e-6)
    x, value = result.astuple()
    assert x == result.x
    assert value == result.value


def test_minimize_with_partial_derivatives():
    result = minimize(
        _quadratic,
        [5.0, 5.0],
        partial_derivative=_quadratic_partial,
        options=MinimizeOptions(method="BFGS"),
    )

    assert result.success
    assert result.x == pytest.approx([1.0, -2.0], abs=1e-4)


def test_partial_derivative_ignored_by_derivative_free_method():
    def _fail(index, x):
        raise AssertionError("Nelder-Mead must not evaluate derivatives")

    result = minimize(_quadratic, [0.0, 0.0], partial_derivative=_fail)

    assert result.x == pytest.approx([1.0, -2.0], abs=1e-3)


def test_empty_vector_skips_minimiser():
    result = minimize(lambda x: 3.5, [])

    assert result.x == []
    assert result.value == 3.5
    assert result.iterations == 0


def test_gradient_forwarding(monkeypatch):
    calls = {}

    def _fake_minimize(fun, x0, **kwargs):
        calls.update(kwargs)
        return SimpleNamespace(x=x0, fun=fun(x0), success=False, nit=7, message="stopped")

    monkeypatch.setattr(optimize, "_scipy_minimize", _fake_minimize)

    result = minimize(
        _quadratic,
        [1.0, -2.0],
        partial_derivative=_quadratic_partial,
        options=MinimizeOptions(method="L-BFGS-B", max_iterations=12),
    )

    assert calls["method"] == "L-BFGS-B"
    assert calls["options"] == {"maxiter": 12}
    assert np.allclose(calls["jac"](np.array([2.0, 0.0])), [2.0, 4.0])
    assert not result.success
    assert result.iterations == 7
    assert result.message == "stopped"

    minimize(
        _quadratic,
        [1.0, -2.0],
        partial_derivative=_quadratic_partial,
        options=MinimizeOptions(method="BFGS", use_forces=False),
    )
    assert calls["jac"] is None


def test_accepts_gradient():
    assert optimize.accepts_gradient("BFGS")
    assert optimize.accepts_gradient("l-bfgs-b")
    assert not optimize.accepts_gradient("Nelder-Mead")
    assert not optimize.accepts_gradient("Powell")
