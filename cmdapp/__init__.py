__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'cmdapp'
__author__ = 'Ethan Uppal, Eric Yachbes'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .behaviors import Argument, Quantifier, Traits
from .dispatcher import *
from .faults import *
from .options import *
from .parser import *
from .program import *
from .tokenizer import *
from .verifier import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info",
    "Argument",
    "Quantifier",
    "Traits",
)

# Load the exposed API of the parser
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the options
__all__ += options.__all__  # type: ignore[attr-defined]
# Load the exposed API of the program metadata
__all__ += program.__all__  # type: ignore[attr-defined]
# Load the exposed API of the pipeline stages
__all__ += tokenizer.__all__  # type: ignore[attr-defined]
__all__ += verifier.__all__  # type: ignore[attr-defined]
__all__ += dispatcher.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
