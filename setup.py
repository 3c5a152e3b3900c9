#!/usr/bin/env python

import sys

from setuptools import find_packages, setup

from djforum import get_package_version, VERSION
from djforum.dependencies import (PYTHON_3_MIN_VERSION,
                                  PYTHON_3_RANGE,
                                  build_dependency_list,
                                  package_dependencies,
                                  test_dependencies)


# Make sure this is a version of Python we are compatible with. This should
# prevent people on older versions from unintentionally trying to install
# the source tarball, and failing.
if sys.version_info < PYTHON_3_MIN_VERSION:
    sys.stderr.write('This version of Djforum is incompatible with your '
                     'version of Python.\n')
    sys.exit(1)


PACKAGE_NAME = 'Djforum'

setup(
    name=PACKAGE_NAME,
    version=get_package_version(),
    license='MIT',
    description=(
        'A Django forum module that runs inside a host application, '
        'guarding each forum request with maintenance, account and '
        'version checks.'
    ),
    author='Djforum contributors',
    packages=find_packages(exclude=['tests']),
    package_data={
        'djforum': [
            'templates/djforum/*.html',
        ],
    },
    python_requires=PYTHON_3_RANGE,
    install_requires=build_dependency_list(package_dependencies),
    extras_require={
        'test': build_dependency_list(test_dependencies),
    },
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Web Environment',
        'Framework :: Django',
        'Framework :: Django :: 4.2',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Internet :: WWW/HTTP :: Dynamic Content :: Message Boards',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
