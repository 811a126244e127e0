from uuid import UUID
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.schemas.trip.trip_schema import TripCreate, TripUpdate, TripIdResponse, TripDetailResponse
from app.core.config import settings
from app.core.database import get_db
from app.core.mail import MailClient, get_mail_client
from app.services.trips.trip_notifications import TripNotifier
from app.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=['Trips'])

async def get_trip_service(
    mail: MailClient = Depends(get_mail_client)
) -> TripService:
    return TripService(TripNotifier(mail))

@router.post("", response_model=TripIdResponse)
async def create_trip_route(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    new_trip = await trip_service.create_trip(db, trip)
    return TripIdResponse(trip_id=new_trip.id)

@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip_route(
    trip_id: UUID,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.get_trip(db, trip_id)

@router.put("/{trip_id}", response_model=TripIdResponse)
async def update_trip_route(
    trip_id: UUID,
    trip_update: TripUpdate,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    trip = await trip_service.update_trip(db, trip_id, trip_update)
    return TripIdResponse(trip_id=trip.id)

@router.get("/{trip_id}/confirm")
async def confirm_trip_route(
    trip_id: UUID,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    await trip_service.confirm_trip(db, trip_id)
    return RedirectResponse(
        url=f"{settings.WEB_BASE_URL}/trips/{trip_id}",
        status_code=status.HTTP_302_FOUND
    )
