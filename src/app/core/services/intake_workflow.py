"""Client intake workflow: validate, create, notify, refresh."""
import asyncio
import logging
from functools import partial
from typing import Callable

from src.app.core.domain.models import (
    Client,
    ClientDraft,
    FormState,
    NotificationStatus,
    SubmissionOutcome,
    WorkflowState,
)
from src.app.core.services.client_service import ClientService
from src.app.core.services.notification import WelcomeNotifier
from src.app.core.services.validation import validate
from src.shared.exceptions import ConflictingEntityFound, StoreError, StoreUnavailable

logger = logging.getLogger(__name__)

CONFLICT_MESSAGES = {
    "email": "A client with this email already exists",
    "business_name": "A client with this business name already exists",
}
GENERIC_FAILURE_NOTICE = "Something went wrong while saving the client. Please try again."


class IntakeWorkflow:
    """
    Drives one session's intake form.

    State moves IDLE -> VALIDATING -> SUBMITTING -> IDLE. An invalid draft
    returns to IDLE without touching the store. A rejected insert keeps the
    draft so only the offending field needs correcting. A successful insert
    fires the welcome email in the background, clears the draft, shows the
    success banner for a fixed time and refreshes the client list.

    Only one submission may be in flight; further submits while SUBMITTING
    are ignored and reported as BUSY. Instances are not shared between sessions.
    """

    def __init__(
        self,
        store: ClientService,
        notifier: WelcomeNotifier,
        success_banner_seconds: float = 5.0,
    ):
        """
        Initialize the workflow.

        Args:
            store: Record store client used to create and list clients
            notifier: Gateway for the welcome email
            success_banner_seconds: How long the success banner stays visible
        """
        self.store = store
        self.notifier = notifier
        self.success_banner_seconds = success_banner_seconds

        self.state = WorkflowState.IDLE
        self.form = FormState()
        self.clients: list[Client] = []
        self.last_notification: NotificationStatus | None = None

        self._notifications: set[asyncio.Task] = set()
        self._banner_timer: asyncio.TimerHandle | None = None

    async def submit(self, draft: ClientDraft) -> SubmissionOutcome:
        """
        Run one submission through validation, creation and notification.

        Never raises for validation, conflict or store failures; the outcome
        and the form state describe what happened.
        """
        if self.form.is_submitting:
            logger.info("Submission already in flight, ignoring submit")
            return SubmissionOutcome.BUSY

        self.form.draft = draft
        self.form.notice = None

        self.state = WorkflowState.VALIDATING
        self.form.errors = validate(draft)
        if self.form.errors:
            self.state = WorkflowState.IDLE
            return SubmissionOutcome.INVALID

        self.state = WorkflowState.SUBMITTING
        self.form.is_submitting = True
        try:
            return await self._create(draft.trimmed())
        finally:
            self.form.is_submitting = False
            self.state = WorkflowState.IDLE

    async def _create(self, draft: ClientDraft) -> SubmissionOutcome:
        try:
            client = await self.store.create_client(draft)
        except ConflictingEntityFound as e:
            logger.info("Client rejected, %s already exists: %s", e.field_name, e.field_value)
            self.form.errors = {e.field_name: CONFLICT_MESSAGES.get(e.field_name, "Already exists")}
            return SubmissionOutcome.CONFLICT
        except StoreError as e:
            logger.error("Failed to create client: %s", e)
            self.form.notice = GENERIC_FAILURE_NOTICE
            return SubmissionOutcome.FAILED

        self._send_welcome(client)
        self.form.reset()
        self._show_success_banner()
        await self.refresh()
        return SubmissionOutcome.CREATED

    async def refresh(self) -> list[Client]:
        """Reload the client list; an unreachable store leaves an empty list."""
        try:
            self.clients = await self.store.list_clients()
        except StoreUnavailable as e:
            logger.warning("Could not load clients, showing an empty list: %s", e)
            self.clients = []
        return self.clients

    def _send_welcome(self, client: Client) -> None:
        # Not awaited: the record is already committed whatever the email outcome.
        self.last_notification = NotificationStatus.PENDING
        task = asyncio.create_task(
            self.notifier.notify(client.email, client.name),
            name=f"welcome-email-{client.id}",
        )
        self._notifications.add(task)
        task.add_done_callback(partial(self._on_notification_done, client))

    def _on_notification_done(self, client: Client, task: asyncio.Task) -> None:
        self._notifications.discard(task)
        if task.cancelled():
            logger.warning("Welcome email to %s was cancelled", client.email)
            self.last_notification = NotificationStatus.FAILED
            return

        error = task.exception()
        if error is not None:
            logger.error("Welcome email to %s failed: %s", client.email, error)
            self.last_notification = NotificationStatus.FAILED
        else:
            logger.info("Welcome email sent to %s", client.email)
            self.last_notification = NotificationStatus.SENT

    async def wait_for_notifications(self) -> None:
        """Wait until every welcome email fired so far has resolved."""
        pending = list(self._notifications)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def _show_success_banner(self) -> None:
        self._cancel_banner_timer()
        self.form.show_success = True
        loop = asyncio.get_running_loop()
        self._banner_timer = loop.call_later(self.success_banner_seconds, self._hide_success_banner)

    def _hide_success_banner(self) -> None:
        self.form.show_success = False
        self._banner_timer = None

    def _cancel_banner_timer(self) -> None:
        if self._banner_timer is not None:
            self._banner_timer.cancel()
            self._banner_timer = None

    def close(self) -> None:
        """Drop pending UI timers; in-flight emails are left to finish."""
        self._cancel_banner_timer()


class IntakeWorkflowRegistry:
    """
    Holds one IntakeWorkflow per signed-in operator.

    Keyed by the auth provider user ID, which stays fixed across access token refreshes.
    """

    def __init__(self, workflow_factory: Callable[[], IntakeWorkflow]):
        self._workflow_factory = workflow_factory
        self._workflows: dict[str, IntakeWorkflow] = {}

    def open(self, user_id: str) -> IntakeWorkflow:
        """Start a fresh workflow for the session, discarding any previous one."""
        self.discard(user_id)
        workflow = self._workflow_factory()
        self._workflows[user_id] = workflow
        return workflow

    def get(self, user_id: str) -> IntakeWorkflow:
        """Return the session's workflow, opening one if needed."""
        workflow = self._workflows.get(user_id)
        if workflow is None:
            workflow = self.open(user_id)
        return workflow

    def discard(self, user_id: str) -> None:
        workflow = self._workflows.pop(user_id, None)
        if workflow is not None:
            workflow.close()

    def __len__(self) -> int:
        return len(self._workflows)
