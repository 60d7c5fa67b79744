# app/shared/enums.py
"""
Toutes les énumérations du projet.

Source unique de vérité pour les rôles, tiers et choix de réponse.
Importé par les modèles, schemas, services et engine.
"""

from enum import Enum


class UserRole(str, Enum):
    USER  = "user"
    ADMIN = "admin"


class UserTier(str, Enum):
    FREE    = "Free"
    PREMIUM = "Premium"    # Débloque la soumission + les résultats


class ResponseChoice(str, Enum):
    YES        = "yes"
    PARTIALLY  = "partially"    # "Partially in place"
    NO         = "no"
    DONT_KNOW  = "dont-know"


class PaymentGateway(str, Enum):
    MOCK_PAY = "mock-pay"
    RAZORPAY = "razorpay"
    STRIPE   = "stripe"
    PAYPAL   = "paypal"


class PaymentStatus(str, Enum):
    SUCCEEDED = "succeeded"
