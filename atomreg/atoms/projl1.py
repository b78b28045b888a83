"""
Euclidean projection onto the l1 ball.

The projection is computed exactly by sorting the absolute values
of the argument, as in

    Duchi, Shalev-Shwartz, Singer and Chandra, "Efficient projections onto
    the l1-ball for learning in high dimensions", ICML 2008.

applied to the absolute values and then transferring the signs back.
"""

import numpy as np

def soft_threshold(arg, theta):
    """
    Shrink each entry of `arg` towards 0 by `theta`, stopping at 0.

    Parameters
    ----------

    arg : ndarray

    theta : float
        Non-negative amount of shrinkage.

    Returns
    -------

    shrunk : ndarray
        ``sign(arg) * max(|arg| - theta, 0)``, never with a sign
        different from `arg`.
    """
    arg = np.asarray(arg, float)
    return np.sign(arg) * np.maximum(np.fabs(arg) - theta, 0)

def projl1(arg, bound):
    """
    Project `arg` onto the l1 ball of radius `bound`.

    Parameters
    ----------

    arg : ndarray
        Point to project. Any shape, the l1 norm is over all entries.

    bound : float
        Radius of the ball, must be non-negative.

    Returns
    -------

    proj : ndarray
        The point of ``{z: ||z||_1 <= bound}`` closest to `arg`
        in Euclidean distance. A copy of `arg` if it is
        already inside the ball.

    Examples
    --------

    >>> projl1(np.array([3., -4., 0., 1.]), 2)
    array([ 0.5, -1.5,  0. ,  0. ])

    """
    if bound < 0:
        raise ValueError('bound should be non-negative, got %s' % bound)

    arg = np.array(arg, float)
    absarg = np.fabs(arg)
    if absarg.sum() <= bound:
        return arg
    if bound == 0:
        return np.zeros_like(arg)

    sorted_abs = np.sort(absarg.reshape(-1))[::-1]
    cumsum = np.cumsum(sorted_abs)
    count = np.arange(1, sorted_abs.shape[0] + 1)

    # the condition holds on a prefix of the sorted entries,
    # rho is the length of that prefix. The largest entry always
    # belongs to it, rounding can hide this when it dwarfs `bound`
    active = sorted_abs - (cumsum - bound) / count > 0
    rho = max(np.count_nonzero(active), 1)
    theta = (cumsum[rho-1] - bound) / rho

    return soft_threshold(arg, theta)
