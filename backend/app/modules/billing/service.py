# modules/billing/service.py
"""
Passage Free → Premium.

Aucune passerelle n'est réellement intégrée :
- mock-pay, razorpay : paiement simulé, le tier passe à Premium
- stripe, paypal     : déclarées mais non branchées → refusées
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List

from app.core.config import settings
from app.shared.enums import PaymentGateway, PaymentStatus, UserTier
from app.shared.models import User

logger = logging.getLogger(__name__)

GATEWAYS: List[Dict] = [
    {
        "id": PaymentGateway.MOCK_PAY,
        "name": "Mock Payment",
        "description": "Free testing gateway (demo only)",
        "fees": "Free",
        "features": ["Testing Only", "No Real Transactions", "Development Mode"],
        "simulated": True,
    },
    {
        "id": PaymentGateway.RAZORPAY,
        "name": "Razorpay",
        "description": "Popular in India and Southeast Asia",
        "fees": "2% + ₹2",
        "features": ["UPI", "Cards", "Net Banking", "Wallets", "EMI"],
        "simulated": True,
    },
    {
        "id": PaymentGateway.STRIPE,
        "name": "Stripe",
        "description": "Most popular payment processor",
        "fees": "2.9% + 30¢",
        "features": ["Credit Cards", "Apple Pay", "Google Pay", "International"],
        "simulated": False,
    },
    {
        "id": PaymentGateway.PAYPAL,
        "name": "PayPal",
        "description": "Trusted worldwide payment solution",
        "fees": "2.9% + 30¢",
        "features": ["PayPal Balance", "Credit Cards", "Bank Transfer", "Buyer Protection"],
        "simulated": False,
    },
]
GATEWAYS_BY_ID = {g["id"]: g for g in GATEWAYS}


class BillingService:

    def list_gateways(self) -> List[Dict]:
        return GATEWAYS

    async def upgrade(self, db: AsyncSession, user: User, gateway: PaymentGateway) -> Dict:
        if user.tier == UserTier.PREMIUM:
            raise ValueError("Compte déjà Premium.")

        option = GATEWAYS_BY_ID.get(gateway)
        if option is None or not option["simulated"]:
            raise ValueError(f"Passerelle {getattr(gateway, 'value', gateway)} non intégrée.")

        user.tier = UserTier.PREMIUM
        await db.commit()
        await db.refresh(user)

        logger.info("Utilisateur %s passé Premium via %s (simulé)", user.id, gateway.value)
        return {
            "status":  PaymentStatus.SUCCEEDED,
            "gateway": gateway,
            "tier":    user.tier,
            "price":   settings.PREMIUM_PRICE_LABEL,
        }
