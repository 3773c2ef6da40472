from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.ports.backend import BackendQueryPort
from app.application.ports.payment import PaymentPort
from app.application.use_cases.availability_resolver import AvailabilityResolver
from app.application.use_cases.booking_session import BookingSession
from app.application.use_cases.booking_wizard import BookingWizard, DraftAutosave
from app.application.use_cases.calendar_step import CalendarStep
from app.application.use_cases.coach_matcher import CoachDirectory
from app.application.use_cases.locations import LocationCatalog
from app.application.use_cases.payment import PaymentService
from app.application.use_cases.player_details import PlayerDetailsService
from app.application.use_cases.time_slots import TimeSlotService
from app.application.utils.dates import today_in
from app.infrastructure.backend.null_backend import NullBackend
from app.infrastructure.backend.supabase_client import SupabaseBackend
from app.infrastructure.navigation.recording_navigator import RecordingNavigator
from app.infrastructure.payments.mock_payments import MockPaymentGateway
from app.infrastructure.payments.stripe_client import StripePaymentGateway
from app.infrastructure.store.json_draft_store import JsonDraftStore
from app.infrastructure.store.session_registry import BookingSessionRegistry


logger = logging.getLogger(__name__)


def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


@lru_cache
def get_backend() -> BackendQueryPort:
    if not settings.backend_configured:
        logger.warning("Supabase env vars missing. Running with no-op backend.")
        return NullBackend()
    return SupabaseBackend()


@lru_cache
def get_payment_gateway() -> PaymentPort:
    if not settings.STRIPE_SECRET_KEY or settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockPaymentGateway (ENV=%s)", settings.ENV)
        return MockPaymentGateway()
    return StripePaymentGateway()


def get_location_catalog() -> LocationCatalog:
    return LocationCatalog(backend=get_backend())


def get_player_details_service() -> PlayerDetailsService:
    return PlayerDetailsService(backend=get_backend())


def get_draft_store(session_id: str) -> JsonDraftStore:
    return JsonDraftStore(data_dir=settings.DRAFT_STORE_DIR, namespace=session_id)


def build_booking_session(session_id: str, restore: bool = True) -> BookingSession:
    tz = get_timezone()
    backend = get_backend()
    resolver = AvailabilityResolver(backend=backend, timezone=tz)
    navigator = RecordingNavigator(
        dashboard_path=settings.DASHBOARD_PATH,
        marketing_path=settings.MARKETING_SITE_PATH,
    )
    wizard = BookingWizard(
        navigator=navigator,
        today_provider=lambda: today_in(tz),
        redirect_delay_seconds=settings.CONFIRMATION_REDIRECT_SECONDS,
    )
    autosave = DraftAutosave(store=get_draft_store(session_id))
    restored = autosave.attach(wizard, today=today_in(tz)) if restore else False
    if not restore:
        wizard.add_observer(autosave)

    calendar = CalendarStep(
        wizard=wizard,
        resolver=resolver,
        slot_service=TimeSlotService(resolver),
        debounce_seconds=settings.MONTH_NAV_DEBOUNCE_MS / 1000,
    )
    return BookingSession(
        session_id=session_id,
        wizard=wizard,
        calendar=calendar,
        locations=get_location_catalog(),
        coaches=CoachDirectory(backend=backend),
        players=get_player_details_service(),
        payments=PaymentService(gateway=get_payment_gateway(), currency=settings.PAYMENT_CURRENCY),
        navigator=navigator,
        restored=restored,
    )


def _has_saved_draft(session_id: str) -> bool:
    return get_draft_store(session_id).exists()


@lru_cache
def get_session_registry() -> BookingSessionRegistry:
    return BookingSessionRegistry(factory=build_booking_session, has_snapshot=_has_saved_draft)
