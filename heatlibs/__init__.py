"""
Library modules for the Global Temperature Heat Map application.
"""

from . import fn__libs_models
from . import fn__libs_scales
from . import fn__libs_charts

__all__ = ['fn__libs_models', 'fn__libs_scales', 'fn__libs_charts']
