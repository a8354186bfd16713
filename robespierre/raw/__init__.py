from .channels import *
from .files import *
from .gateway import *
from .messages import *
from .permissions import *
from .server_members import *
from .servers import *
from .users import *
