"""Example package from the packaging tutorial.

``example`` holds the placeholder ``add_one`` function. The remaining
modules form the ``example-package`` command that scaffolds the tutorial
layout and drives the build, upload and install steps.
"""

__version__ = "0.0.1"
