"""Dependency injection container using dependency-injector library."""
from dependency_injector import containers, providers

from src.app.config import Settings
from src.shared.auth.supabase_auth import SupabaseAuth, SupabaseAuthSettings
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.database.mapping import EntityMapper

from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.client_repository import ClientRepository

from src.app.core.services.client_service import ClientService
from src.app.core.services.intake_workflow import IntakeWorkflow, IntakeWorkflowRegistry
from src.app.core.services.notification import ResendWelcomeNotifier, WelcomeNotifier

from src.app.core.domain.models import Client

WIRED_MODULES = [
    "src.app.api.v1.clients",
    "src.app.api.email",
    "src.app.api.auth",
    "src.app.api.views",
]


def create_entity_mapper(client_mapper: ClientMapper) -> EntityMapper:
    """Factory function to create EntityMapper with proper mappings."""
    return EntityMapper(
        entity_mappings={
            Client: client_mapper.to_entity,
        }
    )


def create_welcome_notifier(config: Settings) -> WelcomeNotifier:
    """
    Factory function to create the welcome email notifier.

    A missing RESEND_API_KEY does not stop the application; the notifier is
    still created and every send fails with NotificationError.
    """
    return ResendWelcomeNotifier(
        api_key=config.resend_api_key,
        from_address=config.email.from_address,
        subject=config.email.welcome_subject,
    )


class Container(containers.DeclarativeContainer):
    """Main application dependency injection container."""

    wiring_config = containers.WiringConfiguration(modules=WIRED_MODULES)

    # =========================================================================
    # CONFIGURATION - Singleton (loaded once, cached)
    # =========================================================================
    config = providers.Singleton(Settings)

    # =========================================================================
    # SINGLETONS - Stateless Mappers (reusable across all requests)
    # =========================================================================
    client_mapper = providers.Singleton(ClientMapper)

    entity_mapper = providers.Singleton(
        create_entity_mapper,
        client_mapper=client_mapper,
    )

    # =========================================================================
    # SINGLETON - Database (shared connection pool)
    # =========================================================================
    database_settings = providers.Singleton(
        DatabaseSettings,
        db_url=config.provided.database_url,
    )

    database = providers.Singleton(
        Database,
        db_settings=database_settings,
    )

    # =========================================================================
    # SINGLETONS - External collaborators (session lookup, email provider)
    # =========================================================================
    supabase_auth_settings = providers.Singleton(
        SupabaseAuthSettings,
        url=config.provided.auth.supabase_url,
        anon_key=config.provided.auth.supabase_anon_key,
    )

    session_provider = providers.Singleton(
        SupabaseAuth,
        settings=supabase_auth_settings,
    )

    welcome_notifier = providers.Singleton(
        create_welcome_notifier,
        config=config,
    )

    # =========================================================================
    # FACTORIES - Repositories and Unit of Work (per-request)
    # =========================================================================
    client_repository = providers.Factory(
        ClientRepository,
        db=database,
        mapper=client_mapper,
    )

    unit_of_work = providers.Factory(
        UnitOfWork,
        db=database,
        entity_mapper=entity_mapper,
    )

    # =========================================================================
    # FACTORIES - Services
    # =========================================================================
    client_service = providers.Factory(
        ClientService,
        repository=client_repository,
        unit_of_work=unit_of_work,
    )

    # One workflow per session, created through the registry
    intake_workflow = providers.Factory(
        IntakeWorkflow,
        store=client_service,
        notifier=welcome_notifier,
        success_banner_seconds=config.provided.intake.success_banner_seconds,
    )

    workflow_registry = providers.Singleton(
        IntakeWorkflowRegistry,
        workflow_factory=intake_workflow.provider,
    )
