"""
Linear operators seen by least squares losses.

A loss such as `atomreg.smooth.quadratic.squared_error` reaches its
argument through an `affine_transform`, i.e. a dense matrix, a scipy
sparse matrix or a diagonal scaling, possibly followed by an offset.
A 2D argument is mapped column by column, so the images of all atoms
of an active set come out of one call.
"""

from operator import add, mul
import warnings

import numpy as np
from scipy import sparse

class AffineError(Exception):
    pass

def broadcast_first(a, b, op):
    """
    Apply `op` to `a` and `b`, a 1D `a` acting as a column so that
    it broadcasts along the rows of `b`. The result has the shape of `b`.
    """
    shape = b.shape
    return op(a.reshape((a.shape[0], -1)),
              b.reshape((b.shape[0], -1))).reshape(shape)

class affine_transform(object):

    r"""
    The map :math:`x \mapsto Dx + \alpha`.

    Parameters
    ----------

    linear_operator : ndarray or sparse matrix
        :math:`D`. A 1D array is a single row unless `diag` is True.

    affine_offset : ndarray (optional)
        :math:`\alpha`, None for a linear map.

    diag : bool
        Read a 1D `linear_operator` as the diagonal of :math:`D`.

    """

    def __init__(self, linear_operator, affine_offset=None, diag=False):
        if linear_operator is None:
            raise AffineError('an affine_transform needs a linear_operator')

        if sparse.issparse(affine_offset):
            affine_offset = affine_offset.toarray().reshape(-1)
        self.affine_offset = affine_offset

        # kind is one of 'sparse', 'diag' or 'dense'
        if sparse.issparse(linear_operator):
            if linear_operator.format != 'csr':
                warnings.warn('sparse linear_operator is in %s format, '
                              'products are faster in csr format' %
                              linear_operator.format)
            self.kind = 'sparse'
            self._transpose = sparse.csr_matrix(linear_operator.T)
        else:
            linear_operator = np.asarray(linear_operator)
            if linear_operator.ndim == 1 and diag:
                self.kind = 'diag'
            elif linear_operator.ndim in [1, 2]:
                self.kind = 'dense'
                linear_operator = linear_operator.reshape((-1, linear_operator.shape[-1]))
            else:
                raise AffineError('linear_operator should be 1D or 2D, got shape %s' %
                                  (linear_operator.shape,))
        self.linear_operator = linear_operator

        if self.kind == 'diag':
            self.input_shape = self.output_shape = linear_operator.shape
        else:
            self.output_shape = (linear_operator.shape[0],)
            self.input_shape = (linear_operator.shape[1],)

    @property
    def shape(self):
        """
        ``output_shape + input_shape``, the shape of :math:`D` as a matrix.
        """
        return tuple(self.output_shape) + tuple(self.input_shape)

    def linear_map(self, x):
        r"""
        Return :math:`Dx`.

        Parameters
        ----------

        x : ndarray
            A vector, or a matrix whose columns are mapped one at a time.

        """
        if self.kind == 'diag':
            return broadcast_first(self.linear_operator, x, mul)
        return np.asarray(self.linear_operator.dot(x))

    def affine_map(self, x):
        r"""
        Return :math:`Dx + \alpha`.
        """
        image = self.linear_map(x)
        if self.affine_offset is None:
            return image
        return broadcast_first(self.affine_offset, image, add)

    def adjoint_map(self, u):
        r"""
        Return :math:`D^Tu`, used to pull gradients back to the input space.
        """
        if self.kind == 'diag':
            return broadcast_first(self.linear_operator, u, mul)
        if self.kind == 'sparse':
            return np.asarray(self._transpose.dot(u))
        return self.linear_operator.T.dot(u)

    def __repr__(self):
        return "%s(shape=%s)" % (self.__class__.__name__, repr(self.shape))

class linear_transform(affine_transform):

    """
    An `affine_transform` without offset.
    """

    def __init__(self, linear_operator, diag=False):
        affine_transform.__init__(self, linear_operator, None, diag=diag)

def astransform(X):
    """
    Return `X` if it is an `affine_transform`, else `linear_transform(X)`.
    """
    if isinstance(X, affine_transform):
        return X
    return linear_transform(X)

def power_L(transform, max_its=500, tol=1e-8, debug=False):
    r"""
    Estimate the largest eigenvalue of :math:`D^TD` by power iteration.

    Its inverse is a safe step size for gradient descent on
    :math:`\frac{1}{2}\|Dx - y\|^2_2`, e.g. with `transform` the design
    times the atoms of an active set.

    Parameters
    ----------

    transform : ndarray, sparse matrix or `affine_transform`

    max_its : int
        Number of power iterations.

    tol : float
        Relative change of the estimate at which to stop.

    debug : bool
        Print the estimate at every iteration.

    Returns
    -------

    L : float
        0 if :math:`D` maps the iterate to 0.

    """
    transform = astransform(transform)
    v = np.random.standard_normal(transform.input_shape)
    L, old_L = 1., 0.
    itercount = 0
    while np.fabs(L - old_L) > tol * L and itercount < max_its:
        v = transform.adjoint_map(transform.linear_map(v))
        old_L, L = L, np.linalg.norm(v)
        if L == 0:
            return 0.
        v /= L
        itercount += 1
        if debug:
            print("%i    L: %.6e" % (itercount, L))
    return L
