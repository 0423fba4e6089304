from .api import is_wrapped as is_wrapped
from .api import wrap as wrap
from .catalog import COMMANDS as COMMANDS
from .catalog import CommandCatalog as CommandCatalog
from .exceptions import CommandError as CommandError
from .exceptions import WrapTargetTypeError as WrapTargetTypeError
from .flavors import Flavor as Flavor
from .flavors import find_flavor as find_flavor
from .flavors import get_flavors as get_flavors
from .flavors import register_flavor as register_flavor
from .flavors import unregister_flavor as unregister_flavor
from .utils.logging import setup_logging as setup_logging

__all__ = [
    "wrap",
    "is_wrapped",
    "Flavor",
    "register_flavor",
    "unregister_flavor",
    "get_flavors",
    "find_flavor",
    "CommandCatalog",
    "COMMANDS",
    "CommandError",
    "WrapTargetTypeError",
    "setup_logging",
]
