"""
Sparse representation of a solution as a combination of atoms.

An `active_set` holds a short list of atoms (vectors in the
ambient space) together with one coefficient per atom. Forward-backward
greedy methods for atomic norm regularized problems add an atom at
every outer iteration, prune atoms that no longer pull their weight
and polish the remaining coefficients. See Algorithm 2 of

    Rao, Shah and Wright, "Forward--backward greedy algorithms for atomic
    norm regularization", IEEE Transactions on Signal Processing 63(21),
    5798--5811, 2015.

"""

import numbers
import warnings
from copy import copy

import numpy as np
from scipy.linalg import lstsq, LinAlgError

from .seminorms import l1norm
from .projl1 import projl1
from ..smooth.quadratic import squared_error

class ActiveSetError(ValueError):
    pass

class SingularSystemError(LinAlgError):
    pass

def restricted_least_squares(design, target, rcond=None):
    """
    Solve the least squares problem ``design.dot(coefs) ~= target``.

    Parameters
    ----------

    design : ndarray
        Matrix with one column per atom, each column being
        the image of an atom under the linear operator of the loss.

    target : ndarray
        Response of the loss.

    rcond : float (optional)
        Singular values of `design` below `rcond` times the
        largest one count as zero. Defaults to ``max(design.shape)``
        times machine precision, as in `numpy.linalg.matrix_rank`.

    Returns
    -------

    coefs : ndarray
        One coefficient per column of `design`.

    Raises
    ------

    SingularSystemError
        If `design` does not have full column rank or the
        solution is not finite.
    """
    natoms = design.shape[1]
    try:
        coefs, _, _, singular_values = lstsq(design, target, cond=rcond)
    except LinAlgError as e:
        raise SingularSystemError('least squares solve failed: %s' % e)
    if rcond is None:
        rcond = max(design.shape) * np.finfo(float).eps
    if singular_values.size:
        rank = (singular_values > rcond * singular_values.max()).sum()
    else:
        rank = 0
    if rank < natoms:
        raise SingularSystemError('restricted system has rank %d with %d atoms' %
                                  (rank, natoms))
    if not np.all(np.isfinite(coefs)):
        raise SingularSystemError('restricted system has non-finite solution')
    return coefs

class active_set(object):

    """
    An ordered collection of atoms paired with coefficients.

    The solution it represents is ``atoms.dot(coefs)`` where
    the columns of `atoms` are the atoms, most recently added first.
    This vector is recomputed whenever it is asked for and never stored.

    Parameters
    ----------

    shape : int or tuple (optional)
        Shape of each atom. If not given, it is fixed by the
        first atom added.

    Notes
    -----

    The defaults of the pruning and refinement steps are
    class attributes and can be changed on a subclass or
    an instance, or overridden by keyword arguments.

    """

    max_its = 100
    default_tol = 1e-3
    min_atoms = 1
    rcond = None
    debug = False

    def __init__(self, shape=None):
        if isinstance(shape, numbers.Integral):
            shape = (shape,)
        if shape is not None:
            shape = tuple(shape)
            if len(shape) != 1:
                raise ActiveSetError('atoms should be vectors, got shape %s' % (shape,))
        self._shape = shape
        self._atoms = []
        self._coefs = np.zeros(0)

    def __len__(self):
        return len(self._atoms)

    @property
    def size(self):
        """
        Number of atoms in the active set.
        """
        return len(self._atoms)

    @property
    def shape(self):
        """
        Shape of each atom, None if unknown.
        """
        return self._shape

    @property
    def atoms(self):
        """
        A copy of the atoms, one per column.
        """
        if self._atoms:
            return np.column_stack(self._atoms)
        if self._shape is None:
            return np.zeros((0, 0))
        return np.zeros(self._shape + (0,))

    @property
    def coefs(self):
        """
        A copy of the coefficients.
        """
        return self._coefs.copy()

    def __repr__(self):
        return "%s(shape=%s, size=%d)" % (self.__class__.__name__,
                                          repr(self.shape),
                                          self.size)

    def __copy__(self):
        new = self.__class__(self._shape)
        new._atoms = [atom.copy() for atom in self._atoms]
        new._coefs = self._coefs.copy()
        return new

    def copy(self):
        return copy(self)

    def _check_atom(self, atom):
        atom = np.array(atom, float)
        if atom.ndim != 1:
            raise ActiveSetError('atoms should be vectors, got shape %s' % (atom.shape,))
        if self._shape is not None and atom.shape != self._shape:
            raise ActiveSetError('atom has shape %s, active set has shape %s' %
                                 (atom.shape, self._shape))
        if not np.all(np.isfinite(atom)):
            raise ActiveSetError('atom has non-finite entries')
        return atom

    def add_atom(self, atom, coef=0.):
        """
        Add `atom` with coefficient `coef`.

        The new atom goes in front, i.e. it has index 0 afterwards.
        """
        atom = self._check_atom(atom)
        coef = float(coef)
        if not np.isfinite(coef):
            raise ActiveSetError('coefficient should be finite, got %s' % coef)
        self._shape = atom.shape
        self._atoms.insert(0, atom)
        self._coefs = np.hstack([[coef], self._coefs])

    def recover_vector(self):
        """
        Return the solution ``atoms.dot(coefs)``.

        Raises
        ------

        ActiveSetError
            If the active set is empty.
        """
        if not self._atoms:
            raise ActiveSetError('cannot recover a vector from an empty active set')
        return self.atoms.dot(self._coefs)

    def set_coef(self, index, value):
        """
        Set the coefficient of the atom at position `index`.
        """
        if not -self.size <= index < self.size:
            raise IndexError('index %d out of range for %d atoms' % (index, self.size))
        value = float(value)
        if not np.isfinite(value):
            raise ActiveSetError('coefficient should be finite, got %s' % value)
        self._coefs[index] = value

    def replace_atoms(self, atoms, coefs=None):
        """
        Replace all atoms and coefficients.

        Parameters
        ----------

        atoms : ndarray
            Matrix whose columns are the new atoms.

        coefs : ndarray (optional)
            One coefficient per column of `atoms`, defaults to zeros.

        """
        atoms = np.array(atoms, float)
        if atoms.ndim != 2:
            raise ActiveSetError('atoms should be given as columns of a matrix')
        if self._shape is not None and atoms.shape[0] != self._shape[0]:
            raise ActiveSetError('atoms have shape %s, active set has shape %s' %
                                 ((atoms.shape[0],), self._shape))
        natoms = atoms.shape[1]
        if coefs is None:
            coefs = np.zeros(natoms)
        coefs = np.array(coefs, float)
        if coefs.shape != (natoms,):
            raise ActiveSetError('expecting %d coefficients, got shape %s' %
                                 (natoms, coefs.shape))
        if not (np.all(np.isfinite(atoms)) and np.all(np.isfinite(coefs))):
            raise ActiveSetError('atoms and coefficients should be finite')
        self._shape = (atoms.shape[0],)
        self._atoms = [atoms[:,i].copy() for i in range(natoms)]
        self._coefs = coefs

    def projection_to_l1(self, tau):
        """
        Project the coefficients onto the l1 ball of radius `tau`.
        """
        self._coefs = projl1(self._coefs, tau)

    def prune_support(self, threshold, loss, min_atoms=None, debug=None):
        r"""
        Remove atoms that do not contribute much to `loss`.

        This is the backward step of forward-backward greedy
        algorithms. At every pass, each atom gets a score

        .. math::

           \frac{C}{2} c_i^2 \|X a_i\|^2_2 - c_i \langle \nabla f(\beta), a_i \rangle

        which is the change in `loss` if that atom were dropped
        without refitting. The first-order part is recomputed at
        the current solution :math:`\beta`, the quadratic part is
        computed once on entry. The atom with the smallest score is
        dropped and the coefficients of the remaining atoms are
        refit by least squares. If the refit loss is at most
        `threshold` the deletion is kept and the next pass starts,
        otherwise the active set is left as it was before the pass.

        A candidate whose refit is singular (the remaining atoms,
        mapped by the design, are linearly dependent) is skipped
        in favour of the next smallest score.

        Parameters
        ----------

        threshold : float
            Largest loss value allowed after a deletion.

        loss : `atomreg.smooth.quadratic.squared_error`
            Least squares loss, its design and response are used to
            refit coefficients.

        min_atoms : int (optional)
            Never prune below this many atoms. Defaults to
            `self.min_atoms`.

        debug : bool (optional)
            Print progress. Defaults to `self.debug`.

        Returns
        -------

        removed : int
            Number of atoms deleted.

        """
        if not isinstance(loss, squared_error):
            raise TypeError('pruning needs a squared_error loss, got %s' %
                            loss.__class__.__name__)
        if not self._atoms:
            raise ActiveSetError('cannot prune an empty active set')
        if min_atoms is None:
            min_atoms = self.min_atoms
        if min_atoms < 1:
            raise ValueError('min_atoms should be at least 1')
        if debug is None:
            debug = self.debug

        atoms = self.atoms
        coefs = self._coefs.copy()
        design = loss.linear_operator.linear_map(atoms)
        target = loss.target
        atom_sq = 0.5 * loss.coef * (design**2).sum(0) * coefs**2

        removed = 0
        while atoms.shape[1] > min_atoms:
            gradient = loss.smooth_objective(atoms.dot(coefs), mode='grad')
            gap = atom_sq - coefs * atoms.T.dot(gradient)

            # stable sort, ties go to the lowest index
            for idx in np.argsort(gap, kind='mergesort'):
                proposed_atoms = np.delete(atoms, idx, axis=1)
                proposed_design = np.delete(design, idx, axis=1)
                try:
                    proposed_coefs = restricted_least_squares(proposed_design,
                                                              target,
                                                              rcond=self.rcond)
                except SingularSystemError as e:
                    if debug:
                        print("\tSkipping atom %d: %s" % (idx, e))
                    continue
                break
            else:
                warnings.warn('pruning stopped, every deletion gave a singular system')
                break

            proposed_value = loss.smooth_objective(proposed_atoms.dot(proposed_coefs),
                                                   mode='func')
            if debug:
                print("%i    atom: %d    gap: %.2e    obj: %.6e    threshold: %.6e" %
                      (atoms.shape[1], idx, gap[idx], proposed_value, threshold))

            if proposed_value > threshold:
                if debug:
                    print("Stopped: deleting atom %d exceeds threshold" % idx)
                break

            atoms, design, coefs = proposed_atoms, proposed_design, proposed_coefs
            atom_sq = np.delete(atom_sq, idx)
            removed += 1

        self._atoms = [atoms[:,i].copy() for i in range(atoms.shape[1])]
        self._coefs = coefs
        return removed

    def projected_gradient_enhancement(self,
                                       loss,
                                       tau,
                                       step,
                                       max_its=None,
                                       tol=None,
                                       debug=None):
        """
        Projected gradient descent on the coefficients, atoms held fixed.

        Each iteration takes a gradient step of the composition of `loss`
        with ``coefs -> atoms.dot(coefs)`` and projects the result onto
        the l1 ball of radius `tau`. Iteration stops when the
        objective decreases by less than `tol`, or after `max_its`
        iterations. A step that increases the objective is not taken.

        Parameters
        ----------

        loss : `atomreg.smooth.smooth_atom`
            Any smooth loss on the ambient space.

        tau : float
            Radius of the l1 ball.

        step : float
            Step size, ``1 / atomreg.affine.power_L(design.dot(atoms))``
            for a least squares loss is safe.

        max_its : int (optional)
            Defaults to `self.max_its`.

        tol : float (optional)
            Defaults to `self.default_tol`.

        debug : bool (optional)
            Defaults to `self.debug`.

        Returns
        -------

        objective_hist : ndarray
            Objective value at the start and after every step taken.

        """
        if not self._atoms:
            raise ActiveSetError('cannot refine an empty active set')
        if step <= 0:
            raise ValueError('step should be positive, got %s' % step)
        if max_its is None:
            max_its = self.max_its
        if tol is None:
            tol = self.default_tol
        if debug is None:
            debug = self.debug

        constraint = l1norm(self.size, bound=tau)
        atoms = self.atoms
        coefs = constraint.bound_prox(self._coefs)
        working_x = atoms.dot(coefs)
        working_obj = loss.smooth_objective(working_x, mode='func')
        objective_hist = [working_obj]

        itercount = 0
        while itercount < max_its:
            grad = atoms.T.dot(loss.smooth_objective(working_x, mode='grad'))
            proposed_coefs = constraint.bound_prox(coefs - step * grad)
            proposed_x = atoms.dot(proposed_coefs)
            proposed_obj = loss.smooth_objective(proposed_x, mode='func')
            itercount += 1

            if debug:
                print("%i    obj: %.6e    step: %.2e    "
                      "obj_change: %.2e    tol: %.1e" %
                      (itercount, working_obj, step,
                       working_obj - proposed_obj, tol))

            if proposed_obj > working_obj:
                if debug:
                    print("Stopped: step would increase the objective")
                break

            obj_change = working_obj - proposed_obj
            coefs, working_x, working_obj = proposed_coefs, proposed_x, proposed_obj
            objective_hist.append(working_obj)

            if obj_change < tol:
                if debug:
                    print('Success: Optimization stopped because '
                          'decrease in objective was below tolerance')
                break

        if debug and itercount == max_its:
            print("Optimization stopped because iteration limit was reached")

        self._coefs = coefs
        return np.array(objective_hist)
