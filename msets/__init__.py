"""Multisets with a configurable equivalence relation."""

from .equivalence import *
from .errors import *
from .multiset import *

__version__ = "0.1a"
