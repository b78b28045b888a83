#!/usr/bin/env python
''' Installation script for atomreg package '''

import os
from os.path import join as pjoin, dirname, exists

# BEFORE importing setuptools, remove MANIFEST. It isn't properly
# updated when the contents of directories change.
if exists('MANIFEST'): os.remove('MANIFEST')

from setuptools import setup


def read_vars_from(info_file):
    """ Read variables from Python text file `info_file`

    The file is exec'ed rather than imported so that setup.py does not
    need numpy or scipy to be installed already.
    """
    ns = {}
    with open(info_file, 'rt') as fobj:
        exec(fobj.read(), {}, ns)
    return type('info', (), ns)

# Get version and release info, which is all stored in atomreg/info.py
info = read_vars_from(pjoin(dirname(__file__) or '.', 'atomreg', 'info.py'))

extra_setuptools_args = dict(
    zip_safe=False,
    python_requires='>=3.7',
    install_requires=info.REQUIRES,
    extras_require = dict(
        test=info.TEST_REQUIRES))


def main(**extra_args):
    setup(name=info.NAME,
          maintainer=info.MAINTAINER,
          maintainer_email=info.MAINTAINER_EMAIL,
          description=info.DESCRIPTION,
          long_description=info.LONG_DESCRIPTION,
          url=info.URL,
          download_url=info.DOWNLOAD_URL,
          license=info.LICENSE,
          classifiers=info.CLASSIFIERS,
          author=info.AUTHOR,
          author_email=info.AUTHOR_EMAIL,
          platforms=info.PLATFORMS,
          version=info.VERSION,
          provides=info.PROVIDES,
          packages     = ['atomreg',
                          'atomreg.tests',
                          'atomreg.affine',
                          'atomreg.affine.tests',
                          'atomreg.atoms',
                          'atomreg.atoms.tests',
                          'atomreg.smooth',
                          'atomreg.smooth.tests',
                         ],
          package_data = {},
          data_files=[],
          scripts= [],
          **extra_args
         )

#simple way to test what setup will do
#python setup.py install --prefix=/tmp
if __name__ == "__main__":
    main(**extra_setuptools_args)
