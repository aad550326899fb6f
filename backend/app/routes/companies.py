from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.auth.identity import Identity
from app.core.database import get_db
from app.dependencies.auth import get_current_identity
from app.schemas.common import MessageOut
from app.schemas.company import CompanyCreate, CompanyOut, CompanyUpdate
from app.services import companies as company_service

router = APIRouter(prefix="/companies", tags=["companies"], dependencies=[Depends(get_current_identity)])


@router.get("/", response_model=list[CompanyOut])
def list_companies(db: Session = Depends(get_db), identity: Identity = Depends(get_current_identity)):
    return company_service.list_companies(db, identity.user_id)


@router.post("/", response_model=CompanyOut, status_code=status.HTTP_201_CREATED)
def create_company(
    payload: CompanyCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return company_service.create_company(db, identity.user_id, payload.model_dump())


@router.get("/{company_id}", response_model=CompanyOut)
def get_company(
    company_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return company_service.get_company(db, identity.user_id, company_id)


@router.patch("/{company_id}", response_model=CompanyOut)
def update_company(
    company_id: int,
    payload: CompanyUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return company_service.update_company(
        db, identity.user_id, company_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/{company_id}", response_model=MessageOut)
def delete_company(
    company_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    company_service.delete_company(db, identity.user_id, company_id)
    return {"message": "Company deleted"}
