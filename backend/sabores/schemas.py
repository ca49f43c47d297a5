from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from .domain.services import AvailabilitySnapshot
from .models import Content, ContentCategory, ContentStatus, Country, Reservation, ReservationStatus, Subscriber


class CountryRead(BaseModel):
    id: Optional[int]
    name: str
    country_code: str
    flag_emoji: Optional[str]
    active: bool

    @classmethod
    def from_db(cls, *, country: Country) -> "CountryRead":
        return cls(
            id=country.id,
            name=country.name,
            country_code=country.country_code,
            flag_emoji=country.flag_emoji,
            active=country.active,
        )


class CountrySummary(BaseModel):
    name: str
    country_code: str
    flag_emoji: Optional[str]


class CategorySummary(BaseModel):
    name: str
    icon: Optional[str]


class CategoryRead(BaseModel):
    id: int
    name: str
    icon: Optional[str]
    content_type: str
    active: bool

    @classmethod
    def from_db(cls, *, category: ContentCategory) -> "CategoryRead":
        return cls(
            id=category.id,
            name=category.name,
            icon=category.icon,
            content_type=category.content_type,
            active=category.active,
        )


class ContentRead(BaseModel):
    id: int
    slug: str
    title: str
    description: Optional[str]
    body: Optional[str]
    content_type: str
    status: ContentStatus
    featured: bool
    views: int
    published_at: Optional[datetime]
    country_id: Optional[int]
    category_id: Optional[int]
    country: Optional[CountrySummary] = None
    category: Optional[CategorySummary] = None

    @classmethod
    def from_db(cls, *, content: Content) -> "ContentRead":
        country = content.country
        category = content.category
        return cls(
            id=content.id,
            slug=content.slug,
            title=content.title,
            description=content.description,
            body=content.body,
            content_type=content.content_type,
            status=content.status,
            featured=content.featured,
            views=content.views,
            published_at=content.published_at,
            country_id=content.country_id,
            category_id=content.category_id,
            country=(
                CountrySummary(name=country.name, country_code=country.country_code, flag_emoji=country.flag_emoji)
                if country is not None
                else None
            ),
            category=CategorySummary(name=category.name, icon=category.icon) if category is not None else None,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int


class ContentPage(BaseModel):
    data: List[ContentRead]
    pagination: Pagination


class ReservationSubmit(BaseModel):
    """Raw reservation body; presence and format are checked by the validation rules."""

    model_config = ConfigDict(extra="allow")

    full_name: Any = None
    phone: Any = None
    email: Any = None
    party_size: Any = None
    date: Any = None
    country_context: Any = None
    occasion: Any = None

    def as_input(self) -> dict[str, Any]:
        return self.model_dump()


class ReservationRead(BaseModel):
    id: Optional[int]
    full_name: str
    phone: str
    email: str
    party_size: int
    date: date
    country_context: Optional[str]
    occasion: Optional[str]
    status: ReservationStatus
    created_at: datetime

    @classmethod
    def from_db(cls, *, reservation: Reservation) -> "ReservationRead":
        return cls(
            id=reservation.id,
            full_name=reservation.full_name,
            phone=reservation.phone,
            email=reservation.email,
            party_size=reservation.party_size,
            date=reservation.date,
            country_context=reservation.country_context,
            occasion=reservation.occasion,
            status=reservation.status,
            created_at=reservation.created_at,
        )


class ReservationConfirmation(BaseModel):
    success: bool = True
    message: str
    reservation: ReservationRead


class ReservationList(BaseModel):
    reservations: List[ReservationRead]
    total: int


class AvailabilityRead(BaseModel):
    date: date
    available: bool
    occupied_seats: int
    remaining: int
    max_capacity: int
    message: str

    @classmethod
    def from_snapshot(cls, snapshot: AvailabilitySnapshot) -> "AvailabilityRead":
        return cls(
            date=snapshot.date,
            available=snapshot.available,
            occupied_seats=snapshot.occupied_seats,
            remaining=snapshot.remaining,
            max_capacity=snapshot.max_capacity,
            message=snapshot.message,
        )


class NewsletterSubscribe(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class SubscriberRead(BaseModel):
    id: Optional[int]
    email: str
    name: Optional[str]
    active: bool

    @classmethod
    def from_db(cls, *, subscriber: Subscriber) -> "SubscriberRead":
        return cls(id=subscriber.id, email=subscriber.email, name=subscriber.name, active=subscriber.active)


class SubscriptionConfirmation(BaseModel):
    success: bool = True
    message: str
    subscriber: SubscriberRead


class StoreInfo(BaseModel):
    configured: bool
    environment: str
    timestamp: str


class HealthRead(BaseModel):
    status: str
    timestamp: str
    environment: str
    store: str
