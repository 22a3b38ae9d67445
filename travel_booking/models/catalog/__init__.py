"""
Catalog models: destinations, packages and offers.
"""

from typing import Dict, Type, Union

from travel_booking.models.base.enums import OfferableKind
from travel_booking.models.catalog.destination import Destination
from travel_booking.models.catalog.offer import Offer
from travel_booking.models.catalog.package import Package

Offerable = Union[Destination, Package, Offer]

OFFERABLE_MODELS: Dict[OfferableKind, Type[Offerable]] = {
    OfferableKind.DESTINATION: Destination,
    OfferableKind.PACKAGE: Package,
    OfferableKind.OFFER: Offer,
}

__all__ = ["Destination", "Package", "Offer", "Offerable", "OFFERABLE_MODELS"]
