import numpy as np

from ..affine import astransform
from ..smooth import smooth_atom, affine_smooth

class quadratic_loss(smooth_atom):

    r"""
    Half the squared l2 norm,
    :math:`\frac{C}{2}\|x - \text{offset}\|^2_2`.
    """

    def smooth_objective(self, x, mode='both'):
        resid = self.apply_offset(x)
        if mode == 'func':
            return self.scale((resid**2).sum()) / 2.
        elif mode == 'grad':
            return self.scale(resid)
        elif mode == 'both':
            return self.scale((resid**2).sum()) / 2., self.scale(resid)
        raise ValueError("mode should be one of 'func', 'grad' or 'both', got %s" % mode)

    def __repr__(self):
        return "%s(%s, coef=%s)" % (self.__class__.__name__,
                                    repr(self.shape),
                                    repr(self.coef))

class squared_error(affine_smooth):
    r"""
    Least squares with design $X$

    .. math::

       \frac{C}{2} \|X\beta-Y\|^2_2

    Besides the objective and its gradient, this loss exposes
    its design as `linear_operator` and its response as `target`,
    which is what `atomreg.atoms.active_set.prune_support` needs to
    re-solve restricted least squares problems.

    Parameters
    ----------

    X : ndarray, sparse matrix or affine_transform
        Design matrix. Must be linear, i.e. have no affine offset.

    Y : ndarray
        Response.

    coef : float (optional)
        Scalar multiple to be applied (must be nonnegative)

    """

    def __init__(self, X, Y, coef=1):
        transform = astransform(X)
        if transform.affine_offset is not None:
            raise ValueError('design of squared_error should be linear, '
                             'subtract its offset from the response instead')
        Y = np.asarray(Y, float)
        if Y.shape != tuple(transform.output_shape):
            raise ValueError('response has shape %s, design output has shape %s' %
                             (Y.shape, transform.output_shape))
        loss = quadratic_loss(transform.output_shape, coef=coef, offset=Y)
        affine_smooth.__init__(self, loss, transform)
        self.target = Y

    @property
    def linear_operator(self):
        return self.affine_transform

    def __repr__(self):
        return "%s(%s, coef=%s)" % (self.__class__.__name__,
                                    repr(self.affine_transform),
                                    repr(self.coef))

def signal_approximator(signal, coef=1):
    r"""
    Least squares with design $I$

    .. math::

       \frac{C}{2} \|\beta-Y\|^2_2

    """
    return quadratic_loss.shift(signal, coef=coef)
