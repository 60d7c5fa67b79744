# modules/billing/router.py
from fastapi import APIRouter, HTTPException, status
from typing import List

from app.shared.deps import DbDep, UserDep
from app.modules.billing.service import BillingService
from app.modules.billing.schemas import GatewayOut, UpgradeIn, UpgradeOut

router = APIRouter(prefix="/billing", tags=["Billing"])
service = BillingService()


@router.get("/gateways", response_model=List[GatewayOut])
async def list_gateways():
    """Passerelles proposées à l'écran de paiement."""
    return service.list_gateways()


@router.post("/upgrade", response_model=UpgradeOut)
async def upgrade(payload: UpgradeIn, db: DbDep, current_user: UserDep):
    """Paiement simulé → tier Premium (débloque la soumission et les résultats)."""
    try:
        return await service.upgrade(db, current_user, payload.gateway)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
