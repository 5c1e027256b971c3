""" A small client for discord's guild and guild member endpoints,
with a guild cache and some OAuth2 helpers on top of the REST client
found in `dwebapi.rest`.
"""

__version__ = "0.1.0"

from .cache import *
from .config import *
from .discord import *
