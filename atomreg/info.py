""" Define distribution parameters for atomreg, including package version

This file contains defines parameters for atomreg that we use to fill settings
in setup.py and the atomreg top-level docstring.  In setup.py in particular,
we exec this file, so it cannot import atomreg
"""

CLASSIFIERS = ["Development Status :: 3 - Alpha",
               "Environment :: Console",
               "Intended Audience :: Science/Research",
               "License :: OSI Approved :: BSD License",
               "Operating System :: OS Independent",
               "Programming Language :: Python :: 3",
               "Topic :: Scientific/Engineering"]

description  = ('Active set maintenance for forward-backward greedy '
                'atomic norm regularization')

long_description = """
atomreg
=======

Maintains a sparse representation of a solution vector as a linear
combination of a small, changing set of atoms. Atoms are added by an outer
greedy loop, pruned when they stop contributing to a least squares
objective, and their coefficients are refined by projected gradient
descent onto an l1 ball.
"""

# Minimum package versions
NUMPY_MIN_VERSION='1.17'
SCIPY_MIN_VERSION = '1.3'

MAJOR               = 0
MINOR               = 1
MICRO               = 0
VERSION             = '%d.%d.%d' % (MAJOR, MINOR, MICRO)

NAME                = 'atomreg'
MAINTAINER          = "atomreg developers"
MAINTAINER_EMAIL    = ""
DESCRIPTION         = description
LONG_DESCRIPTION    = long_description
URL                 = ""
DOWNLOAD_URL        = ""
LICENSE             = "BSD license"
AUTHOR              = "atomreg developers"
AUTHOR_EMAIL        = ""
PLATFORMS           = "OS Independent"
STATUS              = 'alpha'
PROVIDES            = ["atomreg"]
REQUIRES            = ["numpy>=%s" % NUMPY_MIN_VERSION,
                       "scipy>=%s" % SCIPY_MIN_VERSION]
TEST_REQUIRES       = ["pytest"]
