import numbers

from .projl1 import projl1

class l1norm(object):

    r"""
    The l1 norm in bound form, i.e. the constraint
    :math:`\|\beta\|_1 \leq \delta` on the coefficients of an active set.
    """

    def __init__(self, shape, bound):
        if isinstance(shape, numbers.Integral):
            shape = (shape,)
        self.shape = tuple(shape)
        if bound < 0:
            raise ValueError('Bound on the seminorm should be non-negative')
        self.bound = bound

    def __repr__(self):
        return "%s(%s, bound=%f)" % (self.__class__.__name__,
                                     repr(self.shape),
                                     self.bound)

    def bound_prox(self, arg, bound=None):
        r"""
        Return unique minimizer

        .. math::

           \text{argmin}_{\beta} \frac{1}{2}
           \|\theta-\beta\|^2_2 \
           \text{s.t.} \  \|\beta\|_1 \leq \delta

        where :math:`\delta` is `bound`, defaulting to `self.bound`,
        and $\theta$ is `arg`.
        """
        if bound is None:
            bound = self.bound
        if arg.shape != self.shape:
            raise ValueError('expecting shape %s, got %s' % (self.shape, arg.shape))
        return projl1(arg, bound)
