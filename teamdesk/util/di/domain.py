"""Domain layer DI providers."""

from dishka import Scope, provide

from teamdesk.config import EmailSettings, Settings
from teamdesk.domain.repository import (
    CollectionStore,
    UserRepository,
    VerificationRepository,
)
from teamdesk.domain.service import (
    EmailDispatcher,
    EmailTransport,
    InvitationService,
    MaintenanceService,
    PermissionService,
)
from teamdesk.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services that touch repositories are REQUEST-scoped to align with the
    session lifecycle. The email dispatcher is APP-scoped: its background
    deliveries outlive the request that scheduled them.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_permission_service(self) -> PermissionService:
        """Provide permission domain service."""
        return PermissionService()

    @provide(scope=Scope.APP)
    def get_email_dispatcher(
        self, transport: EmailTransport, email_settings: EmailSettings
    ) -> EmailDispatcher:
        """Provide email dispatcher."""
        return EmailDispatcher(transport=transport, email_settings=email_settings)

    @provide
    def get_invitation_service(
        self,
        user_repository: UserRepository,
        verification_repository: VerificationRepository,
        permission_service: PermissionService,
        email_dispatcher: EmailDispatcher,
        settings: Settings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            user_repository=user_repository,
            verification_repository=verification_repository,
            permission_service=permission_service,
            email_dispatcher=email_dispatcher,
            settings=settings,
        )

    @provide
    def get_maintenance_service(
        self, user_repository: UserRepository, collection_store: CollectionStore
    ) -> MaintenanceService:
        """Provide maintenance domain service."""
        return MaintenanceService(
            user_repository=user_repository, collection_store=collection_store
        )
