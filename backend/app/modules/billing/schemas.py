# app/modules/billing/schemas.py
from pydantic import BaseModel
from typing import List

from app.shared.enums import PaymentGateway, PaymentStatus, UserTier


class GatewayOut(BaseModel):
    id: PaymentGateway
    name: str
    description: str
    fees: str
    features: List[str]
    simulated: bool     # True → succès immédiat, aucune transaction réelle


class UpgradeIn(BaseModel):
    gateway: PaymentGateway


class UpgradeOut(BaseModel):
    status: PaymentStatus
    gateway: PaymentGateway
    tier: UserTier
    price: str
