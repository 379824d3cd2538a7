"""Third-party 3D bin packing API (findBinSize) client."""

from .checker import ThirdPartyPackabilityChecker
from .request import PackingApiRequest
from .response import PackingApiResponse

__all__ = ["ThirdPartyPackabilityChecker", "PackingApiRequest", "PackingApiResponse"]
