"""
Smooth losses.

A loss answers ``smooth_objective(x, mode)`` with its value
(``mode='func'``), its gradient (``mode='grad'``) or both
(``mode='both'``). This is all the active set needs to know about it.
"""

import numbers

import numpy as np

from ..affine import astransform

class smooth_atom(object):

    """
    Base class of smooth losses.

    Parameters
    ----------

    shape : int or tuple
       Shape of the argument of `smooth_objective`.

    coef : float (optional)
       Non-negative multiple of the loss.

    offset : ndarray (optional)
       The loss is evaluated at ``x - offset``.

    """

    def __init__(self, shape, coef=1, offset=None):
        if coef < 0:
            raise ValueError('coef should be non-negative to keep the loss convex, got %s' % coef)
        if isinstance(shape, numbers.Integral):
            shape = (shape,)
        self.shape = tuple(shape)
        self.coef = coef
        self.offset = offset

    def smooth_objective(self, x, mode='both'):
        """
        Parameters
        ----------

        x : ndarray
            Point of evaluation.

        mode : str
            One of 'func', 'grad' or 'both'.

        Returns
        -------

        The value at `x` for 'func', the gradient for 'grad',
        the pair ``(value, gradient)`` for 'both'.
        """
        raise NotImplementedError('smooth_objective is implemented by subclasses')

    def apply_offset(self, x):
        if self.offset is None:
            return x
        return x - self.offset

    def scale(self, obj):
        if self.coef == 1:
            return obj
        return self.coef * obj

    @classmethod
    def shift(cls, offset, coef=1):
        """
        The loss of `cls` centered at `offset`.
        """
        offset = np.asarray(offset, float)
        return cls(offset.shape, coef=coef, offset=offset)

class affine_smooth(smooth_atom):

    r"""
    The loss :math:`x \mapsto f(Dx + \alpha)` for a smooth atom :math:`f`
    and an affine transform. Its gradient is the gradient of :math:`f`
    pulled back by :math:`D^T`.

    Parameters
    ----------

    smooth_atom : `atomreg.smooth.smooth_atom`

    atransform : `atomreg.affine.affine_transform`
        Or anything `atomreg.affine.astransform` accepts.

    """

    def __init__(self, smooth_atom, atransform):
        self.atom = smooth_atom
        self.affine_transform = astransform(atransform)
        self.shape = self.affine_transform.input_shape
        self.offset = None

    @property
    def coef(self):
        return self.atom.coef

    @coef.setter
    def coef(self, coef):
        self.atom.coef = coef

    def _pull_back(self, g):
        return self.affine_transform.adjoint_map(g).reshape(self.shape)

    def smooth_objective(self, x, mode='both'):
        eta = self.affine_transform.affine_map(x)
        if mode == 'func':
            return self.atom.smooth_objective(eta, mode='func')
        elif mode == 'grad':
            return self._pull_back(self.atom.smooth_objective(eta, mode='grad'))
        elif mode == 'both':
            value, g = self.atom.smooth_objective(eta, mode='both')
            return value, self._pull_back(g)
        raise ValueError("mode should be one of 'func', 'grad' or 'both', got %s" % mode)

    def __repr__(self):
        return "%s(%s, %s)" % (self.__class__.__name__,
                               repr(self.atom),
                               repr(self.affine_transform))
