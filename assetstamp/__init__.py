__version__ = "0.3.0"

from .build import BuildResult, build
from .context import BuildContext
from .errors import AssetStampError, BuildError, MinifyError
