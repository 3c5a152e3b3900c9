"""Version information for Djforum dependencies.

This contains constants that other parts of Djforum and consumers of Djforum
can use to look up information on major dependencies of Djforum.

The contents in this file might change substantially between releases. If
you're going to make use of data from this file, check it carefully.
"""

# NOTE: This file may not import other (non-Python) modules! It's used for
#       packaging and may be needed before any dependencies have been
#       installed.

from typing import Dict


###########################################################################
# Python and Django compatibility
###########################################################################

#: The minimum supported version of Python 3.x.
PYTHON_3_MIN_VERSION = (3, 8)

#: A string representation of the minimum supported version of Python 3.x.
PYTHON_3_MIN_VERSION_STR = '%s.%s' % PYTHON_3_MIN_VERSION

#: A dependency version range for Python 3.x.
PYTHON_3_RANGE = ">=%s" % PYTHON_3_MIN_VERSION_STR


#: The version range required for Django.
django_version = '~=4.2.17'


###########################################################################
# Python dependencies
###########################################################################

#: All dependencies required to install Djforum.
package_dependencies: Dict[str, str] = {
    'Django': django_version,
    'pytz': '',
    'typing_extensions': '>=4.12.2',
}

#: Dependencies required to run the test suite.
test_dependencies: Dict[str, str] = {
    'kgb': '>=7.1.1',
    'pytest': '>=7.4',
    'pytest-django': '>=4.5',
}


###########################################################################
# Packaging utilities
###########################################################################

def build_dependency_list(deps, version_prefix=''):
    """Build a list of dependency specifiers from a dependency map.

    This can be used along with :py:data:`package_dependencies` or
    :py:data:`test_dependencies` to build a list of dependency specifiers
    for use on the command line and in :file:`setup.py`.

    Args:
        deps (dict):
            A dictionary of dependencies.

    Returns:
        list of str:
        A list of dependency specifiers.
    """
    new_deps = []

    for dep_name, dep_details in deps.items():
        if isinstance(dep_details, list):
            new_deps += [
                '%s%s%s; python_version%s'
                % (dep_name, version_prefix, entry['version'], entry['python'])
                for entry in dep_details
            ]
        else:
            new_deps.append('%s%s%s' % (dep_name, version_prefix, dep_details))

    return sorted(new_deps, key=lambda s: s.lower())
