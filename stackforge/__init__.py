"""StackForge: resolve a web-stack selection into an ordered plan of setup commands.

Subpackages:

* ``stackforge.resolver`` -- compatibility validator and command-plan generator.
* ``stackforge.catalog`` -- technology catalog, presets and selection editing.
* ``stackforge.render`` -- shell-script and Markdown renderers.
"""

__version__ = "0.1.0"
