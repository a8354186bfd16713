"""
Revolt API Wrapper
~~~~~~~~~~~~~~~~~~~

A cache-backed client for the Revolt chat platform.

:copyright: (c) 2024-present MCausc78
:license: MIT, see LICENSE for more details.

"""

from . import (
    routes as routes,
    utils as utils,
)

from .asset import *
from .base import *
from .cache import *
from .channel import *
from .client import *
from .context_managers import *
from .core import *
from .enums import *
from .errors import *
from .events import *
from .gateway import *
from .http import *
from .message import *
from .parser import *
from .patch import *
from .permissions import *
from .resolve import *
from .server import *
from .shard import *
from .state import *
from .user import *
from .utils import *

import typing

if typing.TYPE_CHECKING:
    from . import raw as raw

del typing
