"""Client service - create clients for the acting user."""

import structlog

from core.domain.actors import Actor, acting_user_id
from core.providers import Clock, IdProvider
from tickets.domain.models import Client, create_client
from tickets.stores.interfaces import ClientStore

logger = structlog.get_logger(__name__)


class ClientService:
    """Service for client operations."""

    def __init__(self, store: ClientStore, clock: Clock, ids: IdProvider) -> None:
        self._store = store
        self._clock = clock
        self._ids = ids

    def create_client(self, actor: Actor, name: str) -> Client:
        """Create a client owned by the acting user.

        Raises:
            ForbiddenError: If the actor is not a user or device.
            InvalidInputError: If the name is empty or longer than 80 chars.
        """
        client = create_client(
            id=self._ids.new_client_id(),
            user_id=acting_user_id(actor),
            name=name,
            created_at=self._clock.now(),
        )
        created = self._store.create(client)
        logger.info("client.created", client_id=str(created.id), user_id=str(created.user_id))
        return created
