from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.auth.identity import Identity
from app.core.database import get_db
from app.dependencies.auth import get_current_identity
from app.schemas.application import ApplicationCreate, ApplicationOut, ApplicationUpdate
from app.schemas.application_activity import ApplicationActivityOut
from app.schemas.common import MessageOut
from app.schemas.metrics import ApplicationMetricsOut, TimelineOut
from app.services import applications as application_service
from app.services.activity import list_activity
from app.services.metrics import compute_metrics

router = APIRouter(prefix="/applications", tags=["applications"], dependencies=[Depends(get_current_identity)])


@router.get("/", response_model=list[ApplicationOut])
def list_applications(
    q: str | None = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return application_service.list_applications(db, identity.user_id, q)


# Declared before /{application_id} so the literal paths win.
@router.get("/metrics", response_model=ApplicationMetricsOut)
def get_metrics(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return compute_metrics(application_service.list_applications(db, identity.user_id))


@router.get("/timeline", response_model=TimelineOut)
def get_timeline(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    metrics = compute_metrics(application_service.list_applications(db, identity.user_id))
    return {"averages": metrics.averages}


@router.post("/", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def create_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return application_service.create_application(db, identity.user_id, payload.model_dump())


@router.get("/{application_id}", response_model=ApplicationOut)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return application_service.get_application(db, identity.user_id, application_id)


@router.patch("/{application_id}", response_model=ApplicationOut)
def update_application(
    application_id: int,
    payload: ApplicationUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return application_service.update_application(
        db, identity.user_id, application_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/{application_id}", response_model=MessageOut)
def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    application_service.delete_application(db, identity.user_id, application_id)
    return {"message": "Application deleted"}


@router.get("/{application_id}/activity", response_model=list[ApplicationActivityOut])
def get_activity(
    application_id: int,
    limit: int = 50,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return list_activity(db, identity.user_id, application_id, limit)
