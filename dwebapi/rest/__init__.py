""" This module contains the REST layer used by `dwebapi.Discord`,
it deals with the actual HTTP requests, ratelimits and retries so the
client on top only has to worry about paths and credentials.
"""

from .builders import *
from .client import *
from .endpoints import *
from .errors import *
from .request import *
from .response import *
from .route import *
