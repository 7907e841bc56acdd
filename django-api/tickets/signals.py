"""Django signals for dashboard cache invalidation.

Conditional status writes go through ``QuerySet.update`` and invalidate in
the store; these receivers cover row saves and deletes (creation, admin edits).
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from tickets.cache import invalidate_dashboard
from tickets.models import Client, Ticket


@receiver([post_save, post_delete], sender=Ticket)
def invalidate_ticket_dashboard(sender, instance, **kwargs):
    """Invalidate the owner's dashboard when a ticket is saved or deleted."""
    invalidate_dashboard(instance.user_id)


@receiver([post_save, post_delete], sender=Client)
def invalidate_client_dashboard(sender, instance, **kwargs):
    """Invalidate the owner's dashboard when a client is renamed or deleted."""
    invalidate_dashboard(instance.user_id)
