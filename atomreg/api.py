"""
A collection of commonly used atomreg functions and objects
"""

# Active set imports

from .atoms.active_set import (active_set,
                               restricted_least_squares,
                               ActiveSetError,
                               SingularSystemError)
from .atoms.seminorms import l1norm
from .atoms.projl1 import projl1, soft_threshold

# Affine imports

from .affine import (affine_transform, linear_transform,
                     astransform, power_L, AffineError)

# Smooth imports

from .smooth import smooth_atom, affine_smooth
from .smooth.quadratic import (quadratic_loss,
                               signal_approximator,
                               squared_error)
