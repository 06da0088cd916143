from .user import User
from .patient import Patient
from .visit import Visit
from .treatment import Treatment, TreatmentArea
from .consent import Consent
from .photo import Photo
from .catalog import Product, TreatedArea, TreatmentCategory
from .portfolio import Portfolio, PortfolioItem

__all__ = [
    "User",
    "Patient",
    "Visit",
    "Treatment",
    "TreatmentArea",
    "Consent",
    "Photo",
    "Product",
    "TreatedArea",
    "TreatmentCategory",
    "Portfolio",
    "PortfolioItem",
]
