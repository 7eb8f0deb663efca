"""Swap and liquidity facade over native-paired constant product pools."""

__version__ = "0.1.0"

from amm_facade.config import FacadeConfig  # noqa: E402
from amm_facade.encoding import RouterCalldata  # noqa: E402
from amm_facade.facade import Facade  # noqa: E402
from amm_facade.types import CallContext  # noqa: E402

__all__ = ["Facade", "FacadeConfig", "CallContext", "RouterCalldata", "__version__"]
