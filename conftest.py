"""
Shared pytest fixtures.

Service and repository tests run against an in-memory SQLite database through
aiosqlite, with a scripted provider gateway standing in for Twilio.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import src.db.models  # noqa: F401
from src.db.database import Base
from src.db.organizations.repository import OrganizationRepository
from src.db.organizations.schemas import OrganizationCreate
from src.db.phone_numbers.model import PhoneNumber
from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.exceptions import ProviderError, RemoteCallFailedError
from src.integrations.twilio.schemas import (
    BrandRegistrationResult,
    BusinessIdentity,
    CampaignRegistrationRequest,
    CampaignRegistrationResult,
    PortabilityResult,
    PortInStatus,
    PortInSubmission,
)


class FakeProviderGateway(ProviderGateway):
    """
    Scripted provider gateway.

    Every call is recorded in ``calls``. ``fail(operation)`` makes the named
    operation raise; the canned results can be changed per test.
    """

    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []
        self.failures: dict[str, ProviderError] = {}
        self.failing_numbers: set[str] = set()

        self.brand_status: str | None = "PENDING"
        self.campaign_status: str | None = "PENDING"
        self.campaigns: list[CampaignRegistrationResult] = []
        self.portability = PortabilityResult(
            phone_number="",
            portable=True,
            number_type="LOCAL",
            country="US",
            pin_and_account_number_required=False,
        )
        self.port_in_request_sid = "KW_port"
        self.port_in_status = PortInStatus(port_in_request_sid="KW_port", status="in_review")

        self.identities: list[BusinessIdentity] = []
        self.campaign_requests: list[CampaignRegistrationRequest] = []
        self.submissions: list[PortInSubmission] = []
        self.messaging_services_created = 0

    @property
    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    def fail(self, operation: str, error: ProviderError | None = None) -> None:
        self.failures[operation] = error or RemoteCallFailedError(
            f"Twilio {operation} failed", operation=operation
        )

    def _record(self, operation: str, *args) -> None:
        self.calls.append((operation, args))
        error = self.failures.get(operation)
        if error is not None:
            raise error

    async def create_customer_profile(self, friendly_name: str, email: str) -> str:
        self._record("create_customer_profile", friendly_name, email)
        return "BU_profile"

    async def create_business_identity(self, identity: BusinessIdentity) -> str:
        self._record("create_business_identity", identity)
        self.identities.append(identity)
        return "IT_identity"

    async def attach_identity(self, profile_sid: str, identity_sid: str) -> None:
        self._record("attach_identity", profile_sid, identity_sid)

    async def submit_profile_for_review(self, profile_sid: str) -> None:
        self._record("submit_profile_for_review", profile_sid)

    async def create_brand_registration(
        self, profile_sid: str, brand_type: str
    ) -> BrandRegistrationResult:
        self._record("create_brand_registration", profile_sid, brand_type)
        return BrandRegistrationResult(sid="BN_brand", status=self.brand_status)

    async def fetch_brand_status(self, brand_sid: str) -> BrandRegistrationResult:
        self._record("fetch_brand_status", brand_sid)
        return BrandRegistrationResult(sid=brand_sid, status=self.brand_status)

    async def get_or_create_messaging_service(
        self, friendly_name: str, existing_sid: str | None = None
    ) -> str:
        self._record("get_or_create_messaging_service", friendly_name, existing_sid)
        if existing_sid:
            return existing_sid
        self.messaging_services_created += 1
        return "MG_service"

    async def create_campaign(
        self, messaging_service_sid: str, request: CampaignRegistrationRequest
    ) -> CampaignRegistrationResult:
        self._record("create_campaign", messaging_service_sid, request)
        self.campaign_requests.append(request)
        return CampaignRegistrationResult(
            sid="QE_campaign", campaign_status=self.campaign_status
        )

    async def list_campaigns(
        self, messaging_service_sid: str
    ) -> list[CampaignRegistrationResult]:
        self._record("list_campaigns", messaging_service_sid)
        return self.campaigns

    async def associate_number(
        self, messaging_service_sid: str, phone_number_sid: str
    ) -> None:
        self._record("associate_number", messaging_service_sid, phone_number_sid)
        if phone_number_sid in self.failing_numbers:
            raise RemoteCallFailedError(
                "Phone number is already in a messaging service",
                operation="associate_number",
            )

    async def check_portability(self, phone_number: str) -> PortabilityResult:
        self._record("check_portability", phone_number)
        return self.portability.model_copy(update={"phone_number": phone_number})

    async def submit_port_in(self, submission: PortInSubmission) -> str:
        self._record("submit_port_in", submission)
        self.submissions.append(submission)
        return self.port_in_request_sid

    async def fetch_port_in(self, port_in_request_sid: str) -> PortInStatus:
        self._record("fetch_port_in", port_in_request_sid)
        return self.port_in_status


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    session_local = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_local() as session:
        yield session


@pytest_asyncio.fixture
async def organization(session):
    """A committed organization with no registration yet."""
    org = await OrganizationRepository(session).create(
        OrganizationCreate(name="Sunrise Family Clinic")
    )
    await session.commit()
    return org


@pytest_asyncio.fixture
async def other_organization(session):
    org = await OrganizationRepository(session).create(
        OrganizationCreate(name="Lakeside Dental")
    )
    await session.commit()
    return org


@pytest.fixture
def add_phone_number(session, organization):
    """Factory that inserts a phone number (defaults to ``organization``)."""

    async def _add(
        e164_number: str,
        provider_number_id: str | None = None,
        organization_id: str | None = None,
        **fields,
    ) -> PhoneNumber:
        number = PhoneNumber(
            organization_id=organization_id or organization.id,
            e164_number=e164_number,
            provider_number_id=provider_number_id,
            **fields,
        )
        session.add(number)
        await session.flush()
        await session.commit()
        return number

    return _add


@pytest.fixture
def gateway():
    return FakeProviderGateway()
