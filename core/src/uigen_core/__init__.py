from uigen_core.config import CoreConfig, load_core_config
from uigen_core.home import UIGenPaths, ensure_uigen_layout, resolve_uigen_home

__version__ = "0.1.0"

__all__ = [
    "CoreConfig",
    "UIGenPaths",
    "__version__",
    "ensure_uigen_layout",
    "load_core_config",
    "resolve_uigen_home",
]
