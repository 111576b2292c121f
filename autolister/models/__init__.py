from autolister.models.vehicle import Vehicle
from autolister.models.listing import Listing
from autolister.models.extraction import AiExtraction

__all__ = ["Vehicle", "Listing", "AiExtraction"]
