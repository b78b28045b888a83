import numpy as np
import pytest
import scipy.sparse
from numpy.testing import assert_allclose

import atomreg.api as ar
from atomreg.tests.decorators import set_seed_for_test

def numerical_gradient(loss, x, eps=1.e-6):
    g = np.zeros_like(x)
    for i in range(x.shape[0]):
        e = np.zeros_like(x)
        e[i] = eps
        g[i] = (loss.smooth_objective(x + e, 'func') -
                loss.smooth_objective(x - e, 'func')) / (2 * eps)
    return g

@set_seed_for_test()
def test_squared_error():
    n, p = 20, 6
    X = np.random.standard_normal((n, p))
    Y = np.random.standard_normal(n)
    beta = np.random.standard_normal(p)

    for coef in [1, 2.5]:
        loss = ar.squared_error(X, Y, coef=coef)
        f, g = loss.smooth_objective(beta, 'both')
        resid = X.dot(beta) - Y
        assert_allclose(f, coef * 0.5 * (resid**2).sum())
        assert_allclose(g, coef * X.T.dot(resid))
        assert_allclose(loss.smooth_objective(beta, 'func'), f)
        assert_allclose(loss.smooth_objective(beta, 'grad'), g)
        assert_allclose(g, numerical_gradient(loss, beta), rtol=1.e-4, atol=1.e-4)
        assert loss.coef == coef
        assert loss.shape == (p,)

    assert_allclose(loss.target, Y)
    assert_allclose(loss.linear_operator.linear_map(beta), X.dot(beta))

    with pytest.raises(ValueError):
        loss.smooth_objective(beta, 'hessian')

def test_squared_error_checks():
    X = np.ones((4, 3))
    with pytest.raises(ValueError):
        ar.squared_error(X, np.ones(5))
    with pytest.raises(ValueError):
        ar.squared_error(ar.affine_transform(X, np.ones(4)), np.ones(4))
    with pytest.raises(ValueError):
        ar.squared_error(X, np.ones(4), coef=-1)

@set_seed_for_test()
def test_quadratic_loss():
    p = 5
    x = np.random.standard_normal(p)

    loss = ar.quadratic_loss(p, coef=3.)
    assert loss.shape == (p,)
    f, g = loss.smooth_objective(x)
    assert_allclose(f, 1.5 * (x**2).sum())
    assert_allclose(g, 3 * x)
    assert_allclose(loss.smooth_objective(x, 'func'), f)
    assert_allclose(loss.smooth_objective(x, 'grad'), g)

    with pytest.raises(ValueError):
        loss.smooth_objective(x, 'hessian')
    with pytest.raises(NotImplementedError):
        ar.smooth_atom(p).smooth_objective(x)

@set_seed_for_test()
def test_signal_approximator():
    Z = np.random.standard_normal(8)
    x = np.random.standard_normal(8)
    loss = ar.signal_approximator(Z, coef=2.)
    f, g = loss.smooth_objective(x)
    assert_allclose(f, ((x - Z)**2).sum())
    assert_allclose(g, 2 * (x - Z))
    assert_allclose(g, numerical_gradient(loss, x), rtol=1.e-4, atol=1.e-4)

@set_seed_for_test()
def test_affine_smooth():
    n, p = 10, 4
    X = np.random.standard_normal((n, p))
    Y = np.random.standard_normal(n)
    beta = np.random.standard_normal(p)

    # an offset in the transform moves the center of the loss
    loss = ar.affine_smooth(ar.quadratic_loss(n), ar.affine_transform(X, -Y))
    assert loss.shape == (p,)
    assert_allclose(loss.smooth_objective(beta, 'func'),
                    ar.squared_error(X, Y).smooth_objective(beta, 'func'))
    assert_allclose(loss.smooth_objective(beta, 'grad'),
                    X.T.dot(X.dot(beta) - Y))

    loss.coef = 2.
    assert loss.atom.coef == 2.
    assert_allclose(loss.smooth_objective(beta, 'grad'),
                    2 * X.T.dot(X.dot(beta) - Y))

@set_seed_for_test()
def test_squared_error_designs():
    n, p = 12, 5
    X = scipy.sparse.random(n, p, density=0.5, format='csr')
    Y = np.random.standard_normal(n)
    beta = np.random.standard_normal(p)
    dense = ar.squared_error(X.toarray(), Y)
    loss = ar.squared_error(X, Y)
    assert_allclose(loss.smooth_objective(beta, 'func'),
                    dense.smooth_objective(beta, 'func'))
    assert_allclose(loss.smooth_objective(beta, 'grad'),
                    dense.smooth_objective(beta, 'grad'))

    # a diagonal design
    D = np.random.standard_normal(p)
    loss = ar.squared_error(ar.linear_transform(D, diag=True), Y[:p])
    assert_allclose(loss.smooth_objective(beta, 'grad'), D * (D * beta - Y[:p]))
    assert 'squared_error' in repr(loss)
